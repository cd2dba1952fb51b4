from pathlib import Path

import pytest

from vite_scaffold.commands import PackageManager
from vite_scaffold.config import ScaffoldSettings, load_settings, user_config_path
from vite_scaffold.errors import InvalidConfigFormatError, InvalidConfigSchemaError, UnreadableConfigError


def test_defaults_without_config_files(project_root: Path) -> None:
    assert load_settings(project_root) == ScaffoldSettings()


def test_user_config_lives_under_xdg_config_home(tmp_path: Path) -> None:
    assert user_config_path() == tmp_path / ".config" / "vite-scaffold" / "config.yaml"


def test_project_config_overrides_user_config(project_root: Path, write_yaml) -> None:
    write_yaml(
        user_config_path(),
        "package_manager: pnpm\nbackup: true\ndefaults:\n  router: true\n  packages: [axios]\n",
    )
    write_yaml(project_root / "vite-scaffold.yaml", "package_manager: yarn\nentry_file: main.tsx\n")

    settings = load_settings(project_root)

    assert settings.package_manager == PackageManager.YARN
    assert settings.entry_file == "main.tsx"
    assert settings.backup is True
    assert settings.default_options == ("router", "axios")


def test_defaults_with_tailwind(project_root: Path, write_yaml) -> None:
    write_yaml(project_root / "vite-scaffold.yaml", "defaults:\n  styling: tailwind\n")
    assert load_settings(project_root).default_options == ("tailwind",)


def test_empty_config_file_is_ignored(project_root: Path, write_yaml) -> None:
    write_yaml(project_root / "vite-scaffold.yaml", "")
    assert load_settings(project_root) == ScaffoldSettings()


def test_invalid_yaml_raises_format_error(project_root: Path, write_yaml) -> None:
    write_yaml(project_root / "vite-scaffold.yaml", "package_manager: [npm\n")

    with pytest.raises(InvalidConfigFormatError) as excinfo:
        load_settings(project_root)
    assert excinfo.value.path == project_root / "vite-scaffold.yaml"


def test_unreadable_config_raises_config_error(project_root: Path) -> None:
    (project_root / "vite-scaffold.yaml").mkdir()

    with pytest.raises(UnreadableConfigError) as excinfo:
        load_settings(project_root)
    assert excinfo.value.path == project_root / "vite-scaffold.yaml"
    assert "Cannot read config" in str(excinfo.value)


@pytest.mark.parametrize(
    "text",
    [
        "package_manager: cargo\n",
        "entry_file: ../../etc/passwd\n",
        "defaults:\n  packages: [left-pad]\n",
        "unexpected: 1\n",
        "- just\n- a list\n",
    ],
)
def test_schema_violations_raise_schema_error(project_root: Path, write_yaml, text: str) -> None:
    write_yaml(project_root / "vite-scaffold.yaml", text)

    with pytest.raises(InvalidConfigSchemaError):
        load_settings(project_root)


def test_explicit_config_path_replaces_user_config(project_root: Path, tmp_path: Path, write_yaml) -> None:
    write_yaml(user_config_path(), "package_manager: pnpm\n")
    custom = tmp_path / "custom.yaml"
    write_yaml(custom, "package_manager: bun\n")

    assert load_settings(project_root, config_path=custom).package_manager == PackageManager.BUN


def test_with_overrides() -> None:
    settings = ScaffoldSettings().with_overrides(package_manager="PNPM", backup=True)
    assert settings.package_manager == PackageManager.PNPM
    assert settings.backup is True
    assert ScaffoldSettings().with_overrides() == ScaffoldSettings()
