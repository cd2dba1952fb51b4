import logging
import os
import shutil
import subprocess
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Protocol, Sequence

from vite_scaffold.commands import package_base_name
from vite_scaffold.constants import MANIFEST_FILENAME
from vite_scaffold.inspector import WorkspaceInspector
from vite_scaffold.models import (
    Action,
    ActionKind,
    InstallerCommand,
    Outcome,
    OutcomeReason,
)
from vite_scaffold.utils import backup_file, read_text_safe


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ProcessResult:
    returncode: int
    output: str = ""


class ProcessRunner(Protocol):
    def run(self, argv: Sequence[str], cwd: Path) -> ProcessResult: ...


def _resolve_argv(argv: Sequence[str]) -> list[str]:
    """Resolve argv[0] via PATH; Windows package managers ship as .cmd shims."""
    command = argv[0]
    resolved = shutil.which(command)
    if resolved is None:
        return list(argv)
    if os.name == "nt" and Path(resolved).suffix.lower() in {".cmd", ".bat"}:
        comspec = os.environ.get("ComSpec", "cmd.exe")
        return [comspec, "/d", "/c", resolved, *argv[1:]]
    return [resolved, *argv[1:]]


class SubprocessRunner:
    def run(self, argv: Sequence[str], cwd: Path) -> ProcessResult:
        completed = subprocess.run(
            _resolve_argv(argv),
            cwd=str(cwd),
            capture_output=True,
            text=True,
            encoding="utf-8",
            errors="replace",
            check=False,
        )
        output = "\n".join(item for item in (completed.stdout, completed.stderr) if item)
        return ProcessResult(returncode=completed.returncode, output=output.strip())


@dataclass
class ExecutionContext:
    root: Path
    inspector: WorkspaceInspector = field(default_factory=WorkspaceInspector)
    runner: ProcessRunner = field(default_factory=SubprocessRunner)
    backup: bool = False

    def resolve(self, relative: str) -> Path:
        return self.root / relative


class ActionHandler(Protocol):
    def handle(self, action: Action, context: ExecutionContext) -> Outcome: ...


class CreateFolderHandler:
    def handle(self, action: Action, context: ExecutionContext) -> Outcome:
        path = context.resolve(action.target)
        if context.inspector.is_directory(path):
            return Outcome.skipped(OutcomeReason.ALREADY_PRESENT, "folder exists")
        if context.inspector.exists(path):
            return Outcome.failed(OutcomeReason.PATH_IS_FILE, f"not a directory: {action.target}")
        path.mkdir()
        return Outcome.applied("folder created")


class WriteFileIfAbsentHandler:
    def handle(self, action: Action, context: ExecutionContext) -> Outcome:
        path = context.resolve(action.target)
        if context.inspector.exists(path):
            return Outcome.skipped(OutcomeReason.ALREADY_PRESENT, "file exists, left untouched")
        if not isinstance(action.payload, str):
            return Outcome.failed(OutcomeReason.WRITE_ERROR, f"missing text payload: {action.target}")
        path.write_text(action.payload, encoding="utf-8")
        return Outcome.applied("file written")


class OverwriteFileHandler:
    def handle(self, action: Action, context: ExecutionContext) -> Outcome:
        prerequisite = action.prerequisite or action.target
        if not context.inspector.exists(context.resolve(prerequisite)):
            return Outcome.skipped(OutcomeReason.PREREQUISITE_MISSING, f"{prerequisite} not found")
        if not isinstance(action.payload, str):
            return Outcome.failed(OutcomeReason.WRITE_ERROR, f"missing text payload: {action.target}")

        path = context.resolve(action.target)
        if context.inspector.exists(path):
            if read_text_safe(path) == action.payload:
                return Outcome.skipped(OutcomeReason.ALREADY_PRESENT, "content already up to date")
            if context.backup:
                backup = backup_file(path)
                logger.info("Backed up %s to %s", action.target, backup.name)
        path.write_text(action.payload, encoding="utf-8")
        return Outcome.applied("file overwritten")


class RunInstallerHandler:
    def handle(self, action: Action, context: ExecutionContext) -> Outcome:
        command = action.payload
        if not isinstance(command, InstallerCommand):
            return Outcome.failed(OutcomeReason.INSTALL_ERROR, f"missing command for {action.id}")

        if self._already_satisfied(command, context):
            return Outcome.skipped(OutcomeReason.ALREADY_PRESENT, "already installed")

        logger.info("Running %s", command.display())
        try:
            result = context.runner.run(command.argv, context.root)
        except OSError as exc:
            return Outcome.failed(
                OutcomeReason.INSTALL_ERROR, f"failed to spawn {command.argv[0]!r}: {exc}"
            )
        if result.returncode != 0:
            message = result.output.splitlines()[-1] if result.output else ""
            return Outcome.failed(
                OutcomeReason.INSTALL_ERROR,
                f"{command.display()} exited with {result.returncode}"
                + (f": {message}" if message else ""),
            )
        return Outcome.applied(command.display())

    @staticmethod
    def _already_satisfied(command: InstallerCommand, context: ExecutionContext) -> bool:
        if command.creates is not None:
            return context.inspector.exists(context.resolve(command.creates))
        if not command.packages:
            return False
        installed = context.inspector.installed_packages(context.resolve(MANIFEST_FILENAME))
        return all(package_base_name(name) in installed for name in command.packages)


class ActionExecutor:
    def __init__(
        self,
        root: Path,
        inspector: Optional[WorkspaceInspector] = None,
        runner: Optional[ProcessRunner] = None,
        backup: bool = False,
    ) -> None:
        self.context = ExecutionContext(
            root=root,
            inspector=inspector or WorkspaceInspector(),
            runner=runner or SubprocessRunner(),
            backup=backup,
        )
        self.handlers: dict[ActionKind, ActionHandler] = {
            ActionKind.CREATE_FOLDER: CreateFolderHandler(),
            ActionKind.WRITE_FILE_IF_ABSENT: WriteFileIfAbsentHandler(),
            ActionKind.OVERWRITE_FILE: OverwriteFileHandler(),
            ActionKind.RUN_INSTALLER: RunInstallerHandler(),
        }

    def execute(self, action: Action) -> Outcome:
        """Apply one action. WorkspaceUnavailableError propagates to the caller."""
        handler = self.handlers.get(action.kind)
        if handler is None:
            return Outcome.failed(OutcomeReason.WRITE_ERROR, f"unknown action kind: {action.kind.value}")
        try:
            return handler.handle(action, self.context)
        except OSError as exc:
            return Outcome.failed(
                OutcomeReason.WRITE_ERROR, f"{action.kind.value} failed for {action.target}: {exc}"
            )
