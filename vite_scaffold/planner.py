import heapq
import logging
from dataclasses import replace
from typing import Optional

from vite_scaffold import templates
from vite_scaffold.commands import (
    TAILWIND_PACKAGES,
    build_exec_command,
    build_install_command,
)
from vite_scaffold.config import ScaffoldSettings
from vite_scaffold.constants import (
    LAYOUT_FILENAME,
    SCAFFOLD_FOLDERS,
    SOURCE_DIRNAME,
    TAILWIND_CONFIG_FILENAME,
)
from vite_scaffold.errors import PlanCycleError, UnknownDependencyError
from vite_scaffold.models import (
    FILE_ACTION_KINDS,
    Action,
    ActionKind,
    ActionPlan,
    Feature,
    InstallerCommand,
    OptionSet,
    StylingChoice,
)
from vite_scaffold.options import ROUTER_PACKAGE, option_rank


logger = logging.getLogger(__name__)

LAYOUT_ACTION_ID = "layout"
ENTRY_ACTION_ID = "entry"
PACKAGES_INSTALL_ID = "install:packages"
STYLING_INSTALL_ID = "install:styling"
STYLING_INIT_ID = "init:styling"
STYLESHEET_ACTION_ID = "stylesheet"
STYLING_CONFIG_ACTION_ID = "styling:config"


def folder_action_id(folder: str) -> str:
    return f"folder:{folder}"


def _source_path(*parts: str) -> str:
    return "/".join((SOURCE_DIRNAME,) + parts)


class ScaffoldPlanner:
    def __init__(self, options: OptionSet, settings: Optional[ScaffoldSettings] = None) -> None:
        self.options = options
        self.settings = settings or ScaffoldSettings()
        self._actions: list[Action] = []

    def build(self) -> ActionPlan:
        self._actions = []
        self._plan_base()
        if self.options.use_router:
            self._plan_router()
        self._plan_packages()
        if self.options.styling == StylingChoice.TAILWIND:
            self._plan_tailwind()
        return ActionPlan(actions=order_actions(self._actions))

    def _ordinary_packages(self) -> list[str]:
        names = set(self.options.extra_packages)
        if self.options.use_router:
            names.add(ROUTER_PACKAGE)
        return sorted(names, key=lambda name: (option_rank(name), name))

    def _has_action(self, action_id: str) -> bool:
        return any(action.id == action_id for action in self._actions)

    def _register(self, action: Action) -> None:
        for index, existing in enumerate(self._actions):
            same_file = (
                action.kind in FILE_ACTION_KINDS
                and existing.kind in FILE_ACTION_KINDS
                and existing.target == action.target
            )
            if same_file or existing.id == action.id:
                logger.debug("Action %s superseded by %s layer", existing.id, action.feature.value)
                self._actions[index] = replace(action, id=existing.id)
                return
        self._actions.append(action)

    def _plan_base(self) -> None:
        for folder in SCAFFOLD_FOLDERS:
            self._register(
                Action(
                    id=folder_action_id(folder),
                    kind=ActionKind.CREATE_FOLDER,
                    target=_source_path(folder),
                    feature=Feature.BASE,
                    detail=f"create {folder}/",
                )
            )
        self._register(
            Action(
                id=LAYOUT_ACTION_ID,
                kind=ActionKind.WRITE_FILE_IF_ABSENT,
                target=_source_path("Layout", LAYOUT_FILENAME),
                feature=Feature.BASE,
                detail="write default layout",
                depends_on=(folder_action_id("Layout"),),
                payload=templates.DEFAULT_LAYOUT,
            )
        )

    def _plan_router(self) -> None:
        self._register(
            Action(
                id=LAYOUT_ACTION_ID,
                kind=ActionKind.WRITE_FILE_IF_ABSENT,
                target=_source_path("Layout", LAYOUT_FILENAME),
                feature=Feature.ROUTER,
                detail="write router-aware layout",
                depends_on=(folder_action_id("Layout"),),
                payload=templates.ROUTER_LAYOUT,
            )
        )
        entry = _source_path(self.settings.entry_file)
        self._register(
            Action(
                id=ENTRY_ACTION_ID,
                kind=ActionKind.OVERWRITE_FILE,
                target=entry,
                feature=Feature.ROUTER,
                detail="wrap root render in BrowserRouter",
                depends_on=(LAYOUT_ACTION_ID, PACKAGES_INSTALL_ID),
                payload=templates.router_entry(self.settings.stylesheet),
                prerequisite=entry,
            )
        )

    def _plan_packages(self) -> None:
        packages = self._ordinary_packages()
        if not packages:
            return
        argv = build_install_command(self.settings.package_manager, packages)
        self._register(
            Action(
                id=PACKAGES_INSTALL_ID,
                kind=ActionKind.RUN_INSTALLER,
                target=" ".join(packages),
                feature=Feature.PACKAGES if self.options.extra_packages else Feature.ROUTER,
                detail=f"install {', '.join(packages)}",
                payload=InstallerCommand(argv=argv, packages=tuple(packages)),
            )
        )

    def _plan_tailwind(self) -> None:
        manager = self.settings.package_manager
        install_depends = (
            (PACKAGES_INSTALL_ID,) if self._has_action(PACKAGES_INSTALL_ID) else ()
        )
        self._register(
            Action(
                id=STYLING_INSTALL_ID,
                kind=ActionKind.RUN_INSTALLER,
                target=" ".join(TAILWIND_PACKAGES),
                feature=Feature.STYLING,
                detail="install tailwind toolchain",
                depends_on=install_depends,
                payload=InstallerCommand(
                    argv=build_install_command(manager, TAILWIND_PACKAGES, dev=True),
                    packages=TAILWIND_PACKAGES,
                ),
            )
        )
        init = InstallerCommand(
            argv=build_exec_command(manager, ("tailwindcss", "init", "-p")),
            creates=TAILWIND_CONFIG_FILENAME,
        )
        self._register(
            Action(
                id=STYLING_INIT_ID,
                kind=ActionKind.RUN_INSTALLER,
                target=init.display(),
                feature=Feature.STYLING,
                detail="initialize tailwind config",
                depends_on=(STYLING_INSTALL_ID,),
                payload=init,
            )
        )
        self._register(
            Action(
                id=STYLESHEET_ACTION_ID,
                kind=ActionKind.OVERWRITE_FILE,
                target=_source_path(self.settings.stylesheet),
                feature=Feature.STYLING,
                detail="replace stylesheet with tailwind directives",
                depends_on=(STYLING_INIT_ID,),
                payload=templates.TAILWIND_STYLESHEET,
                prerequisite=TAILWIND_CONFIG_FILENAME,
            )
        )
        self._register(
            Action(
                id=STYLING_CONFIG_ACTION_ID,
                kind=ActionKind.OVERWRITE_FILE,
                target=TAILWIND_CONFIG_FILENAME,
                feature=Feature.STYLING,
                detail="point tailwind content at src/",
                depends_on=(STYLING_INIT_ID,),
                payload=templates.TAILWIND_CONFIG,
                prerequisite=TAILWIND_CONFIG_FILENAME,
            )
        )


def order_actions(actions: list[Action]) -> tuple[Action, ...]:
    """Topologically sort actions, breaking ties by registration order."""
    position = {action.id: index for index, action in enumerate(actions)}
    for action in actions:
        for dependency in action.depends_on:
            if dependency not in position:
                raise UnknownDependencyError(action.id, dependency)

    waiting = {action.id: set(action.depends_on) for action in actions}
    dependents: dict[str, list[str]] = {action.id: [] for action in actions}
    for action in actions:
        for dependency in dict.fromkeys(action.depends_on):
            dependents[dependency].append(action.id)

    ready = [(position[action_id], action_id) for action_id, deps in waiting.items() if not deps]
    heapq.heapify(ready)
    ordered: list[Action] = []
    while ready:
        index, action_id = heapq.heappop(ready)
        ordered.append(actions[index])
        for dependent in dependents[action_id]:
            waiting[dependent].discard(action_id)
            if not waiting[dependent]:
                heapq.heappush(ready, (position[dependent], dependent))

    if len(ordered) != len(actions):
        emitted = {action.id for action in ordered}
        raise PlanCycleError([action.id for action in actions if action.id not in emitted])
    return tuple(ordered)


def build_plan(options: OptionSet, settings: Optional[ScaffoldSettings] = None) -> ActionPlan:
    return ScaffoldPlanner(options=options, settings=settings).build()
