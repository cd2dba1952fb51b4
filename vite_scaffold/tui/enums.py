from enum import Enum

from vite_scaffold.models import OutcomeStatus, RunStatus


class UIStyle(str, Enum):
    BLUE = "blue"
    GREEN = "green"
    YELLOW = "yellow"
    RED = "red"
    CYAN = "cyan"
    MAGENTA = "magenta"
    DIM = "dim"
    WHITE = "white"


OUTCOME_STATUS_STYLE = {
    OutcomeStatus.APPLIED: UIStyle.GREEN.value,
    OutcomeStatus.SKIPPED: UIStyle.YELLOW.value,
    OutcomeStatus.FAILED: UIStyle.RED.value,
}

RUN_STATUS_STYLE = {
    RunStatus.COMPLETED: UIStyle.GREEN.value,
    RunStatus.COMPLETED_WITH_SKIPS: UIStyle.YELLOW.value,
    RunStatus.ABORTED: UIStyle.RED.value,
}
