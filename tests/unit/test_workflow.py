"""Tests for the order stage state machine."""

import pytest

from src.ta_common.enums import OrderStatus
from src.ta_common.errors import IllegalTransitionError, InvalidStatusError
from src.ta_order.domain import workflow
from src.ta_order.domain.workflow import (
    STAGES,
    allowed_targets,
    check_transition,
    is_clickable,
    next_stage,
    previous_stage,
    rank,
)


class TestRank:
    @pytest.mark.parametrize("status,expected", [
        ("acceptance", 1),
        ("completion", 2),
        ("translating", 3),
        ("editing", 4),
        ("office", 5),
        ("ready", 6),
        ("archived", 7),
    ])
    def test_rank(self, status: str, expected: int) -> None:
        assert rank(status) == expected

    def test_legacy_translation_spelling(self) -> None:
        assert rank("translation") == rank("translating")

    def test_unknown_status(self) -> None:
        with pytest.raises(InvalidStatusError) as exc_info:
            rank("shipped")
        assert exc_info.value.code == 2003

    def test_initial_and_terminal(self) -> None:
        assert workflow.INITIAL_STATUS == OrderStatus.ACCEPTANCE
        assert workflow.TERMINAL_STATUS == OrderStatus.ARCHIVED
        assert STAGES[0] == workflow.INITIAL_STATUS
        assert STAGES[-1] == workflow.TERMINAL_STATUS


class TestIsClickable:
    def test_full_grid(self) -> None:
        # rank(target) >= rank(current) - 1, over every pair
        for i, current in enumerate(STAGES, start=1):
            for j, target in enumerate(STAGES, start=1):
                assert is_clickable(current.value, target.value) is (j >= i - 1), (current, target)

    def test_forward_jump_allowed(self) -> None:
        assert is_clickable("acceptance", "ready") is True

    def test_one_step_back_allowed(self) -> None:
        assert is_clickable("office", "editing") is True

    def test_two_steps_back_rejected(self) -> None:
        assert is_clickable("office", "translating") is False

    def test_same_stage_allowed(self) -> None:
        assert is_clickable("editing", "editing") is True

    def test_back_from_archived(self) -> None:
        assert is_clickable("archived", "ready") is True
        assert is_clickable("archived", "office") is False


class TestCheckTransition:
    def test_returns_parsed_target(self) -> None:
        assert check_transition("acceptance", "completion") == OrderStatus.COMPLETION

    def test_legacy_target_is_normalized(self) -> None:
        assert check_transition("completion", "translation") == OrderStatus.TRANSLATING

    def test_office_to_translating_rejected(self) -> None:
        # rank 3 < rank 5 - 1 = 4
        with pytest.raises(IllegalTransitionError) as exc_info:
            check_transition("office", "translating")
        assert exc_info.value.code == 3001
        assert "office" in exc_info.value.message
        assert "translating" in exc_info.value.message

    def test_unknown_target(self) -> None:
        with pytest.raises(InvalidStatusError):
            check_transition("acceptance", "done")


class TestNeighbours:
    def test_allowed_targets_from_office(self) -> None:
        assert [s.value for s in allowed_targets("office")] == [
            "editing", "office", "ready", "archived",
        ]

    def test_allowed_targets_from_acceptance_is_everything(self) -> None:
        assert allowed_targets("acceptance") == list(STAGES)

    def test_next_stage(self) -> None:
        assert next_stage("ready") == OrderStatus.ARCHIVED
        assert next_stage("archived") is None

    def test_previous_stage(self) -> None:
        assert previous_stage("completion") == OrderStatus.ACCEPTANCE
        assert previous_stage("acceptance") is None
