import os
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any, Optional

import yaml
from jsonschema import Draft7Validator

from vite_scaffold.commands import PackageManager
from vite_scaffold.constants import (
    CONFIG_DIRNAME,
    CONFIG_FILENAME,
    DEFAULT_ENTRY_FILENAME,
    DEFAULT_STYLESHEET_FILENAME,
    PROJECT_CONFIG_FILENAME,
)
from vite_scaffold.errors import (
    InvalidConfigFormatError,
    InvalidConfigSchemaError,
    UnreadableConfigError,
)
from vite_scaffold.options import PACKAGE_OPTIONS


_FILENAME_PATTERN = r"^[A-Za-z0-9_.-]+\.(js|jsx|ts|tsx|css)$"

SETTINGS_SCHEMA: dict[str, Any] = {
    "$schema": "http://json-schema.org/draft-07/schema#",
    "type": "object",
    "additionalProperties": False,
    "properties": {
        "package_manager": {"enum": [item.value for item in PackageManager]},
        "entry_file": {"type": "string", "pattern": _FILENAME_PATTERN},
        "stylesheet": {"type": "string", "pattern": _FILENAME_PATTERN},
        "backup": {"type": "boolean"},
        "defaults": {
            "type": "object",
            "additionalProperties": False,
            "properties": {
                "router": {"type": "boolean"},
                "styling": {"enum": ["none", "tailwind"]},
                "packages": {
                    "type": "array",
                    "items": {"enum": list(PACKAGE_OPTIONS)},
                    "uniqueItems": True,
                },
            },
        },
    },
}


@dataclass(frozen=True)
class ScaffoldSettings:
    package_manager: PackageManager = PackageManager.NPM
    entry_file: str = DEFAULT_ENTRY_FILENAME
    stylesheet: str = DEFAULT_STYLESHEET_FILENAME
    backup: bool = False
    default_options: tuple[str, ...] = field(default_factory=tuple)

    def with_overrides(
        self,
        package_manager: Optional[str] = None,
        backup: Optional[bool] = None,
    ) -> "ScaffoldSettings":
        updated = self
        if package_manager is not None:
            updated = replace(updated, package_manager=PackageManager(package_manager.lower()))
        if backup is not None:
            updated = replace(updated, backup=backup)
        return updated


def user_config_path() -> Path:
    base = os.environ.get("XDG_CONFIG_HOME")
    root = Path(base) if base else Path.home() / ".config"
    return root / CONFIG_DIRNAME / CONFIG_FILENAME


def project_config_path(project_root: Path) -> Path:
    return project_root / PROJECT_CONFIG_FILENAME


def load_config_file(path: Path) -> dict[str, Any]:
    if not path.exists():
        return {}
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise UnreadableConfigError(path, getattr(exc, "strerror", None) or str(exc)) from exc
    try:
        payload = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise InvalidConfigFormatError(path, str(exc).splitlines()[0]) from exc
    if payload is None:
        return {}

    validator = Draft7Validator(SETTINGS_SCHEMA)
    errors = sorted(validator.iter_errors(payload), key=lambda item: item.json_path)
    if errors:
        first = errors[0]
        location = first.json_path
        raise InvalidConfigSchemaError(path, f"{location}: {first.message}")
    return payload


def _defaults_to_options(defaults: dict[str, Any]) -> tuple[str, ...]:
    options: list[str] = []
    if defaults.get("router"):
        options.append("router")
    options.extend(defaults.get("packages", []))
    if defaults.get("styling") == "tailwind":
        options.append("tailwind")
    return tuple(options)


def settings_from_payload(payload: dict[str, Any], base: ScaffoldSettings) -> ScaffoldSettings:
    updated = base
    if "package_manager" in payload:
        updated = replace(updated, package_manager=PackageManager(payload["package_manager"]))
    if "entry_file" in payload:
        updated = replace(updated, entry_file=payload["entry_file"])
    if "stylesheet" in payload:
        updated = replace(updated, stylesheet=payload["stylesheet"])
    if "backup" in payload:
        updated = replace(updated, backup=payload["backup"])
    if "defaults" in payload:
        updated = replace(updated, default_options=_defaults_to_options(payload["defaults"]))
    return updated


def load_settings(project_root: Path, config_path: Optional[Path] = None) -> ScaffoldSettings:
    """Merge the user config and the per-project config, project winning."""
    settings = ScaffoldSettings()
    for path in (config_path or user_config_path(), project_config_path(project_root)):
        settings = settings_from_payload(load_config_file(path), settings)
    return settings
