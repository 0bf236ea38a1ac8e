from __future__ import annotations

from childcare_system.core.enums import AbsenceType, TransitionStatus
from childcare_system.core.error_messages import get_error_message
from childcare_system.roster.attendance import (
    LABEL_CHECK_IN,
    LABEL_CHECK_OUT,
    LABEL_SELECT_CHILDREN,
    LABEL_UPDATE_STATUS,
    AttendanceTransition,
)
from childcare_system.roster.scope import RosterScope
from childcare_system.roster.store import RosterStore


def _setup(children, absences, today):
    roster = RosterStore(children, absences, max_workers=2)
    roster.load(RosterScope.for_guardian("g1"), today=today)
    return roster, AttendanceTransition(roster, children, max_workers=2)


def test_button_label_follows_selection(children_repo, absences_repo, seeded_children, today):
    roster, attendance = _setup(children_repo, absences_repo, today)
    assert attendance.button_label() == LABEL_SELECT_CHILDREN

    roster.toggle_select(seeded_children["anna"])
    assert attendance.button_label() == LABEL_CHECK_IN

    roster.toggle_select(seeded_children["anna"])
    roster.toggle_select(seeded_children["ben"])
    assert attendance.button_label() == LABEL_CHECK_OUT

    roster.toggle_select(seeded_children["anna"])
    assert attendance.button_label() == LABEL_UPDATE_STATUS


def test_bulk_checks_in_when_all_selected_are_out(children_repo, absences_repo, seeded_children, today):
    roster, attendance = _setup(children_repo, absences_repo, today)
    roster.toggle_select(seeded_children["anna"])
    roster.toggle_select(seeded_children["cleo"])

    result = attendance.apply_bulk_transition()

    assert result.status == TransitionStatus.FULLY_APPLIED
    assert list(result.applied) == [seeded_children["anna"], seeded_children["cleo"]]
    for key in ("anna", "cleo"):
        local = roster.get(seeded_children[key])
        assert local.checked_in is True
        assert local.selected is False
        assert children_repo.get_by_id(seeded_children[key]).checked_in is True


def test_bulk_checks_out_when_all_selected_are_in(children_repo, absences_repo, seeded_children, today):
    roster, attendance = _setup(children_repo, absences_repo, today)
    roster.toggle_select(seeded_children["ben"])

    attendance.apply_bulk_transition()

    assert roster.get(seeded_children["ben"]).checked_in is False
    assert children_repo.get_by_id(seeded_children["ben"]).checked_in is False


def test_mixed_selection_checks_everyone_in(flaky_children, absences_repo, seeded_children, today):
    roster, attendance = _setup(flaky_children, absences_repo, today)
    roster.toggle_select(seeded_children["anna"])
    roster.toggle_select(seeded_children["ben"])

    attendance.apply_bulk_transition()

    assert sorted(flaky_children.checked_in_writes) == sorted(
        [(seeded_children["anna"], True), (seeded_children["ben"], True)]
    )
    assert roster.get(seeded_children["ben"]).checked_in is True


def test_check_in_clears_local_absence_but_keeps_history(children_repo, absences_repo, seeded_children, today):
    anna = seeded_children["anna"]
    absences_repo.append(anna, absence_type=AbsenceType.VACATION, from_date="2026-03-09", to_date="2026-03-15")
    roster, attendance = _setup(children_repo, absences_repo, today)
    assert roster.get(anna).absence_type == AbsenceType.VACATION

    roster.toggle_select(anna)
    attendance.apply_bulk_transition()

    assert roster.get(anna).absence_type is None
    assert roster.get(anna).absence_from is None
    assert len(absences_repo.list_for_child(anna)) == 1


def test_empty_selection_is_a_no_op(flaky_children, absences_repo, seeded_children, today):
    _, attendance = _setup(flaky_children, absences_repo, today)

    result = attendance.apply_bulk_transition()

    assert result.status == TransitionStatus.NOTHING_TO_DO
    assert flaky_children.checked_in_writes == []
    assert attendance.error_message is None


def test_partial_failure_keeps_optimistic_state_and_reports(flaky_children, absences_repo, seeded_children, today):
    anna, cleo = seeded_children["anna"], seeded_children["cleo"]
    flaky_children.fail_ids = {cleo}
    roster, attendance = _setup(flaky_children, absences_repo, today)
    roster.toggle_select(anna)
    roster.toggle_select(cleo)

    result = attendance.apply_bulk_transition()

    assert result.status == TransitionStatus.PARTIALLY_APPLIED
    assert result.failed_ids == [cleo]
    assert roster.get(cleo).checked_in is True
    assert flaky_children.get_by_id(cleo).checked_in is False
    assert flaky_children.get_by_id(anna).checked_in is True
    assert attendance.error_message == get_error_message("general", "SERVER")

    attendance.clear_error()
    assert attendance.error_message is None


def test_all_writes_failing_is_reported_as_fully_failed(flaky_children, absences_repo, seeded_children, today):
    flaky_children.fail_ids = {seeded_children["anna"]}
    roster, attendance = _setup(flaky_children, absences_repo, today)
    roster.toggle_select(seeded_children["anna"])

    result = attendance.apply_bulk_transition()

    assert result.status == TransitionStatus.FULLY_FAILED
    assert not result.ok


def test_toggle_single_flips_one_child_and_leaves_selection(children_repo, absences_repo, seeded_children, today):
    anna, cleo = seeded_children["anna"], seeded_children["cleo"]
    absences_repo.append(anna, absence_type=AbsenceType.SICKNESS, from_date="2026-03-10", to_date="2026-03-10")
    roster, attendance = _setup(children_repo, absences_repo, today)
    roster.toggle_select(cleo)

    result = attendance.toggle_single(anna)

    assert result.status == TransitionStatus.FULLY_APPLIED
    assert roster.get(anna).checked_in is True
    assert roster.get(anna).absence_type is None
    assert roster.get(cleo).selected is True
    assert children_repo.get_by_id(anna).checked_in is True


def test_toggle_single_without_target_does_nothing(flaky_children, absences_repo, seeded_children, today):
    _, attendance = _setup(flaky_children, absences_repo, today)

    assert attendance.toggle_single(None).status == TransitionStatus.NOTHING_TO_DO
    assert attendance.toggle_single("unknown").status == TransitionStatus.NOTHING_TO_DO
    assert flaky_children.checked_in_writes == []
