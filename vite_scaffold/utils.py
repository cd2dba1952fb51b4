import json
import shutil
from datetime import datetime
from pathlib import Path
from typing import Any


def now_stamp() -> str:
    return datetime.now().strftime("%Y%m%d-%H%M%S")


def load_json_object(path: Path) -> dict[str, Any] | None:
    """Return the JSON object stored at ``path``, or None if absent or unreadable."""
    try:
        with path.open("r", encoding="utf-8") as handle:
            payload = json.load(handle)
    except (OSError, ValueError):
        return None
    return payload if isinstance(payload, dict) else None


def read_text_safe(path: Path) -> str | None:
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError):
        return None


def backup_file(path: Path) -> Path:
    backup_path = path.with_name(f"{path.name}.bak-{now_stamp()}")
    shutil.copy2(path, backup_path)
    return backup_path


def compact_home(text: str | Path) -> str:
    """Replace the home directory prefix with ``~`` for display."""
    value = str(text)
    home = str(Path.home())
    if value == home:
        return "~"
    return value.replace(f"{home}/", "~/")
