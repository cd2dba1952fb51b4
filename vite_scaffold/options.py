from typing import Final, Iterable

from vite_scaffold.errors import UnknownOptionError
from vite_scaffold.models import OptionSet, StylingChoice


ROUTER_OPTION: Final[str] = "router"
TAILWIND_OPTION: Final[str] = "tailwind"
ROUTER_PACKAGE: Final[str] = "react-router-dom"

# Declaration order is the tie-break order for planning and package lists.
RECOGNIZED_OPTIONS: Final[tuple[str, ...]] = (
    ROUTER_OPTION,
    "axios",
    ROUTER_PACKAGE,
    "react-icons",
    TAILWIND_OPTION,
)

PACKAGE_OPTIONS: Final[tuple[str, ...]] = tuple(
    name for name in RECOGNIZED_OPTIONS if name not in (ROUTER_OPTION, TAILWIND_OPTION)
)

OPTION_DESCRIPTIONS: Final[dict[str, str]] = {
    ROUTER_OPTION: "router-aware layout and BrowserRouter entry file",
    "axios": "promise based HTTP client",
    ROUTER_PACKAGE: "install react-router-dom only",
    "react-icons": "popular icon packs as React components",
    TAILWIND_OPTION: "Tailwind CSS with PostCSS and config rewrite",
}


def option_rank(name: str) -> int:
    try:
        return RECOGNIZED_OPTIONS.index(name)
    except ValueError:
        return len(RECOGNIZED_OPTIONS)


def parse_options(identifiers: Iterable[str]) -> OptionSet:
    """Validate raw option identifiers and freeze them into an OptionSet."""
    selected: list[str] = []
    unknown: list[str] = []
    for raw in identifiers:
        name = raw.strip().lower()
        if not name:
            continue
        if name not in RECOGNIZED_OPTIONS:
            unknown.append(raw)
            continue
        if name not in selected:
            selected.append(name)
    if unknown:
        raise UnknownOptionError(unknown)

    return OptionSet(
        use_router=ROUTER_OPTION in selected,
        styling=StylingChoice.TAILWIND if TAILWIND_OPTION in selected else StylingChoice.NONE,
        extra_packages=frozenset(name for name in selected if name in PACKAGE_OPTIONS),
    )


def option_identifiers(option_set: OptionSet) -> list[str]:
    names: list[str] = []
    if option_set.use_router:
        names.append(ROUTER_OPTION)
    names.extend(option_set.extra_packages)
    if option_set.styling == StylingChoice.TAILWIND:
        names.append(TAILWIND_OPTION)
    return sorted(names, key=option_rank)
