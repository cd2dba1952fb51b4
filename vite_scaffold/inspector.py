import errno
import os
import stat
from pathlib import Path

from vite_scaffold.errors import WorkspaceUnavailableError
from vite_scaffold.utils import load_json_object


_MISSING_ERRNOS = (errno.ENOENT, errno.ENOTDIR)


class WorkspaceInspector:
    """Read-only filesystem queries, evaluated fresh on every call."""

    def _stat(self, path: Path) -> os.stat_result | None:
        try:
            return os.stat(path)
        except OSError as exc:
            if exc.errno in _MISSING_ERRNOS:
                return None
            raise WorkspaceUnavailableError(path, exc.strerror or str(exc)) from exc

    def exists(self, path: Path) -> bool:
        return self._stat(path) is not None

    def is_directory(self, path: Path) -> bool:
        result = self._stat(path)
        return result is not None and stat.S_ISDIR(result.st_mode)

    def installed_packages(self, manifest: Path) -> frozenset[str]:
        if not self.exists(manifest):
            return frozenset()
        payload = load_json_object(manifest)
        if payload is None:
            return frozenset()
        names: set[str] = set()
        for section in ("dependencies", "devDependencies"):
            declared = payload.get(section)
            if isinstance(declared, dict):
                names.update(key for key in declared if isinstance(key, str))
        return frozenset(names)
