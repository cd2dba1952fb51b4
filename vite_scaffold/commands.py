import re
from enum import Enum
from typing import Final, Iterable

from vite_scaffold.errors import InvalidPackageNameError
from vite_scaffold.options import PACKAGE_OPTIONS


class PackageManager(str, Enum):
    NPM = "npm"
    PNPM = "pnpm"
    YARN = "yarn"
    BUN = "bun"


TAILWIND_PACKAGES: Final[tuple[str, ...]] = (
    "tailwindcss@3",
    "postcss",
    "autoprefixer",
)

ALLOWED_PACKAGES: Final[frozenset[str]] = frozenset(PACKAGE_OPTIONS) | frozenset(
    TAILWIND_PACKAGES
)

_PACKAGE_NAME_RE = re.compile(
    r"^(@[a-z0-9][a-z0-9._-]*/)?[a-z0-9][a-z0-9._-]*(@[A-Za-z0-9._^~<>=-]+)?$"
)

_INSTALL_ARGV: Final[dict[PackageManager, tuple[str, ...]]] = {
    PackageManager.NPM: ("npm", "install"),
    PackageManager.PNPM: ("pnpm", "add"),
    PackageManager.YARN: ("yarn", "add"),
    PackageManager.BUN: ("bun", "add"),
}

_DEV_FLAG: Final[dict[PackageManager, str]] = {
    PackageManager.NPM: "-D",
    PackageManager.PNPM: "-D",
    PackageManager.YARN: "-D",
    PackageManager.BUN: "-d",
}

_EXEC_ARGV: Final[dict[PackageManager, tuple[str, ...]]] = {
    PackageManager.NPM: ("npx",),
    PackageManager.PNPM: ("pnpm", "exec"),
    PackageManager.YARN: ("yarn",),
    PackageManager.BUN: ("bunx",),
}


def package_base_name(spec: str) -> str:
    """Strip a version suffix: ``tailwindcss@3`` -> ``tailwindcss``."""
    if spec.startswith("@"):
        scope, _, rest = spec[1:].partition("/")
        return f"@{scope}/{rest.split('@', 1)[0]}"
    return spec.split("@", 1)[0]


def validate_package_name(spec: str) -> str:
    if not _PACKAGE_NAME_RE.match(spec):
        raise InvalidPackageNameError(spec, "not a package token")
    if spec not in ALLOWED_PACKAGES:
        raise InvalidPackageNameError(spec, "not in allow-list")
    return spec


def build_install_command(
    manager: PackageManager, packages: Iterable[str], dev: bool = False
) -> tuple[str, ...]:
    names = [validate_package_name(name) for name in packages]
    if not names:
        raise ValueError("Installer command requires at least one package")
    argv = list(_INSTALL_ARGV[manager])
    if dev:
        argv.append(_DEV_FLAG[manager])
    argv.extend(names)
    return tuple(argv)


def build_exec_command(manager: PackageManager, args: Iterable[str]) -> tuple[str, ...]:
    return _EXEC_ARGV[manager] + tuple(args)
