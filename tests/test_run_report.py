import pytest

from vite_scaffold.models import (
    Action,
    ActionKind,
    Feature,
    Outcome,
    OutcomeReason,
    OutcomeStatus,
    RunReport,
    RunStatus,
)


def _action(action_id: str, feature: Feature = Feature.BASE) -> Action:
    return Action(id=action_id, kind=ActionKind.CREATE_FOLDER, target=f"src/{action_id}", feature=feature, detail="")


def test_clean_skips_keep_status_completed() -> None:
    report = RunReport()
    report.record(_action("a"), Outcome.applied())
    report.record(_action("b"), Outcome.skipped(OutcomeReason.ALREADY_PRESENT))
    report.finalize()

    assert report.overall_status == RunStatus.COMPLETED
    assert report.summary() == {"applied": 1, "skipped": 1, "failed": 0, "actions": 2, "pending": 0}


@pytest.mark.parametrize(
    "outcome",
    [
        Outcome.skipped(OutcomeReason.DEPENDENCY_FAILED),
        Outcome.skipped(OutcomeReason.PREREQUISITE_MISSING),
        Outcome.failed(OutcomeReason.INSTALL_ERROR, "exit 1"),
    ],
)
def test_non_clean_outcomes_complete_with_skips(outcome: Outcome) -> None:
    report = RunReport()
    report.record(_action("a"), Outcome.applied())
    report.record(_action("b"), outcome)

    assert report.overall_status == RunStatus.COMPLETED_WITH_SKIPS


def test_abort_records_fault_and_pending() -> None:
    report = RunReport()
    report.record(_action("a"), Outcome.failed(OutcomeReason.IO_UNAVAILABLE, "gone"))
    report.abort("gone", ["b", "c"])

    assert report.overall_status == RunStatus.ABORTED
    assert report.summary()["pending"] == 2
    with pytest.raises(RuntimeError):
        report.record(_action("b"), Outcome.applied())


def test_feature_status_groups_outcomes() -> None:
    report = RunReport()
    report.record(_action("base"), Outcome.applied())
    report.record(_action("layout", Feature.ROUTER), Outcome.skipped(OutcomeReason.ALREADY_PRESENT))
    report.record(_action("install", Feature.PACKAGES), Outcome.failed(OutcomeReason.INSTALL_ERROR))
    report.record(_action("init", Feature.STYLING), Outcome.skipped(OutcomeReason.DEPENDENCY_FAILED))

    assert report.feature_status() == {
        Feature.BASE: OutcomeStatus.APPLIED,
        Feature.ROUTER: OutcomeStatus.SKIPPED,
        Feature.PACKAGES: OutcomeStatus.FAILED,
        Feature.STYLING: OutcomeStatus.FAILED,
    }


def test_outcome_label_and_entry_dict() -> None:
    report = RunReport()
    report.record(_action("a"), Outcome.failed(OutcomeReason.PATH_IS_FILE, "not a directory"))

    assert report.entries[0].outcome.label() == "failed(path_is_file)"
    assert report.entries[0].as_dict()["reason"] == "path_is_file"
    assert report.outcome_for("a").is_failed
    assert report.outcome_for("missing") is None
