"""Drive a scaffold plan through the executor one action at a time."""

import logging
from pathlib import Path
from typing import Optional

from vite_scaffold.config import ScaffoldSettings
from vite_scaffold.constants import SOURCE_DIRNAME
from vite_scaffold.errors import NotAProjectRootError, WorkspaceUnavailableError
from vite_scaffold.executor import ActionExecutor, ProcessRunner
from vite_scaffold.inspector import WorkspaceInspector
from vite_scaffold.models import (
    Action,
    ActionPlan,
    OptionSet,
    Outcome,
    OutcomeReason,
    OutcomeStatus,
    RunReport,
)
from vite_scaffold.planner import build_plan


logger = logging.getLogger(__name__)


class ScaffoldOrchestrator:
    def __init__(
        self,
        root: Path,
        settings: Optional[ScaffoldSettings] = None,
        inspector: Optional[WorkspaceInspector] = None,
        runner: Optional[ProcessRunner] = None,
    ) -> None:
        self.root = root
        self.settings = settings or ScaffoldSettings()
        self.inspector = inspector or WorkspaceInspector()
        self.executor = ActionExecutor(
            root=root,
            inspector=self.inspector,
            runner=runner,
            backup=self.settings.backup,
        )

    def check_project_root(self) -> None:
        if not self.inspector.is_directory(self.root / SOURCE_DIRNAME):
            raise NotAProjectRootError(self.root, SOURCE_DIRNAME)

    def plan(self, options: OptionSet) -> ActionPlan:
        self.check_project_root()
        return build_plan(options, self.settings)

    def run(self, options: OptionSet) -> RunReport:
        plan = self.plan(options)
        return self.execute(plan)

    def execute(self, plan: ActionPlan) -> RunReport:
        report = RunReport()
        outcomes: dict[str, Outcome] = {}

        for position, action in enumerate(plan):
            blocker = self._failed_dependency(action, outcomes)
            if blocker is not None:
                outcome = Outcome.skipped(
                    OutcomeReason.DEPENDENCY_FAILED, f"depends on failed action {blocker}"
                )
            else:
                logger.debug("Executing %s (%s)", action.id, action.kind.value)
                try:
                    outcome = self.executor.execute(action)
                except WorkspaceUnavailableError as exc:
                    report.record(action, Outcome.failed(OutcomeReason.IO_UNAVAILABLE, str(exc)))
                    pending = [item.id for item in plan.actions[position + 1 :]]
                    report.abort(str(exc), pending)
                    logger.error("Run aborted at %s: %s", action.id, exc)
                    return report

            outcomes[action.id] = outcome
            report.record(action, outcome)
            self._log_outcome(action, outcome)

        report.finalize()
        return report

    @staticmethod
    def _failed_dependency(action: Action, outcomes: dict[str, Outcome]) -> Optional[str]:
        for dependency in action.depends_on:
            outcome = outcomes.get(dependency)
            if outcome is None or outcome.blocks_dependents:
                return dependency
        return None

    @staticmethod
    def _log_outcome(action: Action, outcome: Outcome) -> None:
        if outcome.status == OutcomeStatus.FAILED:
            logger.warning("%s %s: %s", action.id, outcome.label(), outcome.detail)
        else:
            logger.info("%s %s", action.id, outcome.label())


def run_scaffold(
    root: Path,
    options: OptionSet,
    settings: Optional[ScaffoldSettings] = None,
    runner: Optional[ProcessRunner] = None,
) -> RunReport:
    return ScaffoldOrchestrator(root=root, settings=settings, runner=runner).run(options)
