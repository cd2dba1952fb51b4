import pytest

from vite_scaffold.commands import (
    PackageManager,
    build_exec_command,
    build_install_command,
    package_base_name,
    validate_package_name,
)
from vite_scaffold.errors import InvalidPackageNameError, UnknownOptionError
from vite_scaffold.models import OptionSet, StylingChoice
from vite_scaffold.options import RECOGNIZED_OPTIONS, option_identifiers, parse_options


def test_parse_options_builds_frozen_option_set() -> None:
    options = parse_options(["Router", " axios ", "tailwind", "axios"])

    assert options == OptionSet(
        use_router=True,
        styling=StylingChoice.TAILWIND,
        extra_packages=frozenset({"axios"}),
    )
    with pytest.raises(Exception):
        options.use_router = False  # type: ignore[misc]


def test_parse_options_empty_selection_is_base_only() -> None:
    assert parse_options([]) == OptionSet()
    assert parse_options(["", "  "]) == OptionSet()


def test_parse_options_rejects_unknown_identifiers() -> None:
    with pytest.raises(UnknownOptionError) as excinfo:
        parse_options(["axios", "left-pad", "bootstrap"])
    assert excinfo.value.names == ["left-pad", "bootstrap"]


def test_option_identifiers_round_trip_in_declared_order() -> None:
    names = option_identifiers(parse_options(["tailwind", "react-icons", "router"]))
    assert names == ["router", "react-icons", "tailwind"]
    assert all(name in RECOGNIZED_OPTIONS for name in names)


@pytest.mark.parametrize(
    "spec,expected",
    [
        ("axios", "axios"),
        ("tailwindcss@3", "tailwindcss"),
        ("@tailwindcss/vite", "@tailwindcss/vite"),
        ("@tailwindcss/vite@4.0.0", "@tailwindcss/vite"),
    ],
)
def test_package_base_name(spec: str, expected: str) -> None:
    assert package_base_name(spec) == expected


@pytest.mark.parametrize("name", ["axios; rm -rf /", "$(whoami)", "Axios", "", "react icons"])
def test_validate_package_name_rejects_injection(name: str) -> None:
    with pytest.raises(InvalidPackageNameError):
        validate_package_name(name)


def test_validate_package_name_enforces_allow_list() -> None:
    with pytest.raises(InvalidPackageNameError) as excinfo:
        validate_package_name("left-pad")
    assert "allow-list" in str(excinfo.value)


@pytest.mark.parametrize(
    "manager,dev,expected",
    [
        (PackageManager.NPM, False, ("npm", "install", "axios")),
        (PackageManager.NPM, True, ("npm", "install", "-D", "axios")),
        (PackageManager.PNPM, True, ("pnpm", "add", "-D", "axios")),
        (PackageManager.YARN, False, ("yarn", "add", "axios")),
        (PackageManager.BUN, True, ("bun", "add", "-d", "axios")),
    ],
)
def test_build_install_command(manager: PackageManager, dev: bool, expected: tuple[str, ...]) -> None:
    assert build_install_command(manager, ["axios"], dev=dev) == expected


def test_build_install_command_requires_packages() -> None:
    with pytest.raises(ValueError):
        build_install_command(PackageManager.NPM, [])


def test_build_exec_command() -> None:
    assert build_exec_command(PackageManager.NPM, ["tailwindcss", "init"]) == ("npx", "tailwindcss", "init")
    assert build_exec_command(PackageManager.BUN, ["tailwindcss"]) == ("bunx", "tailwindcss")
