from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Union


class ActionKind(str, Enum):
    CREATE_FOLDER = "create_folder"
    WRITE_FILE_IF_ABSENT = "write_file_if_absent"
    OVERWRITE_FILE = "overwrite_file"
    RUN_INSTALLER = "run_installer"


FILE_ACTION_KINDS = (ActionKind.WRITE_FILE_IF_ABSENT, ActionKind.OVERWRITE_FILE)


class Feature(str, Enum):
    BASE = "base"
    ROUTER = "router"
    PACKAGES = "packages"
    STYLING = "styling"


class StylingChoice(str, Enum):
    NONE = "none"
    TAILWIND = "tailwind"


class OutcomeStatus(str, Enum):
    APPLIED = "applied"
    SKIPPED = "skipped"
    FAILED = "failed"


class OutcomeReason(str, Enum):
    ALREADY_PRESENT = "already_present"
    PREREQUISITE_MISSING = "prerequisite_missing"
    DEPENDENCY_FAILED = "dependency_failed"
    PATH_IS_FILE = "path_is_file"
    INSTALL_ERROR = "install_error"
    WRITE_ERROR = "write_error"
    IO_UNAVAILABLE = "io_unavailable"


class RunStatus(str, Enum):
    COMPLETED = "completed"
    COMPLETED_WITH_SKIPS = "completed_with_skips"
    ABORTED = "aborted"


@dataclass(frozen=True)
class OptionSet:
    use_router: bool = False
    styling: StylingChoice = StylingChoice.NONE
    extra_packages: frozenset[str] = frozenset()


@dataclass(frozen=True)
class InstallerCommand:
    argv: tuple[str, ...]
    packages: tuple[str, ...] = ()
    creates: Optional[str] = None

    def display(self) -> str:
        return " ".join(self.argv)


@dataclass(frozen=True)
class Action:
    id: str
    kind: ActionKind
    target: str
    feature: Feature
    detail: str
    depends_on: tuple[str, ...] = ()
    payload: Union[str, InstallerCommand, None] = None
    prerequisite: Optional[str] = None


@dataclass(frozen=True)
class ActionPlan:
    actions: tuple[Action, ...]

    def __iter__(self):
        return iter(self.actions)

    def __len__(self) -> int:
        return len(self.actions)

    def ids(self) -> list[str]:
        return [action.id for action in self.actions]

    def get(self, action_id: str) -> Optional[Action]:
        for action in self.actions:
            if action.id == action_id:
                return action
        return None

    def summary(self) -> dict[str, int]:
        counts = {kind.value: 0 for kind in ActionKind}
        for action in self.actions:
            counts[action.kind.value] += 1
        counts["actions"] = len(self.actions)
        return counts


@dataclass(frozen=True)
class Outcome:
    status: OutcomeStatus
    reason: Optional[OutcomeReason] = None
    detail: str = ""

    @classmethod
    def applied(cls, detail: str = "") -> "Outcome":
        return cls(OutcomeStatus.APPLIED, None, detail)

    @classmethod
    def skipped(cls, reason: OutcomeReason, detail: str = "") -> "Outcome":
        return cls(OutcomeStatus.SKIPPED, reason, detail)

    @classmethod
    def failed(cls, reason: OutcomeReason, detail: str = "") -> "Outcome":
        return cls(OutcomeStatus.FAILED, reason, detail)

    @property
    def is_failed(self) -> bool:
        return self.status == OutcomeStatus.FAILED

    @property
    def is_clean(self) -> bool:
        if self.status == OutcomeStatus.APPLIED:
            return True
        return (
            self.status == OutcomeStatus.SKIPPED
            and self.reason == OutcomeReason.ALREADY_PRESENT
        )

    @property
    def blocks_dependents(self) -> bool:
        return self.is_failed or self.reason == OutcomeReason.DEPENDENCY_FAILED

    def label(self) -> str:
        if self.reason is None:
            return self.status.value
        return f"{self.status.value}({self.reason.value})"


@dataclass(frozen=True)
class ReportEntry:
    action: Action
    outcome: Outcome

    def as_dict(self) -> dict[str, str]:
        return {
            "id": self.action.id,
            "kind": self.action.kind.value,
            "target": self.action.target,
            "feature": self.action.feature.value,
            "status": self.outcome.status.value,
            "reason": self.outcome.reason.value if self.outcome.reason else "",
            "detail": self.outcome.detail,
        }


@dataclass
class RunReport:
    entries: list[ReportEntry] = field(default_factory=list)
    pending: list[str] = field(default_factory=list)
    fault: Optional[str] = None
    finalized: bool = False

    def record(self, action: Action, outcome: Outcome) -> None:
        if self.finalized:
            raise RuntimeError("Cannot record outcomes on a finalized report")
        self.entries.append(ReportEntry(action=action, outcome=outcome))

    def abort(self, fault: str, pending: list[str]) -> None:
        self.fault = fault
        self.pending = list(pending)
        self.finalized = True

    def finalize(self) -> None:
        self.finalized = True

    def outcome_for(self, action_id: str) -> Optional[Outcome]:
        for entry in self.entries:
            if entry.action.id == action_id:
                return entry.outcome
        return None

    @property
    def overall_status(self) -> RunStatus:
        if self.fault is not None:
            return RunStatus.ABORTED
        if all(entry.outcome.is_clean for entry in self.entries):
            return RunStatus.COMPLETED
        return RunStatus.COMPLETED_WITH_SKIPS

    @property
    def has_failures(self) -> bool:
        return any(entry.outcome.is_failed for entry in self.entries)

    def summary(self) -> dict[str, int]:
        counts = {status.value: 0 for status in OutcomeStatus}
        for entry in self.entries:
            counts[entry.outcome.status.value] += 1
        counts["actions"] = len(self.entries)
        counts["pending"] = len(self.pending)
        return counts

    def feature_status(self) -> dict[Feature, OutcomeStatus]:
        """Collapse per-action outcomes into one status per requested feature.

        A feature is failed if any of its actions failed or was blocked by a
        failed dependency, skipped if none of its actions changed anything or
        one of them lacked a prerequisite, and applied otherwise.
        """
        grouped: dict[Feature, list[Outcome]] = {}
        for entry in self.entries:
            grouped.setdefault(entry.action.feature, []).append(entry.outcome)

        result: dict[Feature, OutcomeStatus] = {}
        for feature, outcomes in grouped.items():
            if any(outcome.blocks_dependents for outcome in outcomes):
                result[feature] = OutcomeStatus.FAILED
            elif any(not outcome.is_clean for outcome in outcomes) or all(
                outcome.status == OutcomeStatus.SKIPPED for outcome in outcomes
            ):
                result[feature] = OutcomeStatus.SKIPPED
            else:
                result[feature] = OutcomeStatus.APPLIED
        return result
