"""Order stage state machine.

Stages are totally ordered by rank:

    acceptance(1) → completion(2) → translating(3) → editing(4)
        → office(5) → ready(6) → archived(7)

A move from rank R to rank T is allowed iff T >= R - 1: staff may jump
forward any number of stages (fast-tracked work) but may step back only one
stage at a time. Moving to the current stage is allowed and is a no-op for
the workflow (the backend still records a history entry).
"""

from src.ta_common.enums import OrderStatus
from src.ta_common.errors import IllegalTransitionError, InvalidStatusError

STAGES: tuple[OrderStatus, ...] = (
    OrderStatus.ACCEPTANCE,
    OrderStatus.COMPLETION,
    OrderStatus.TRANSLATING,
    OrderStatus.EDITING,
    OrderStatus.OFFICE,
    OrderStatus.READY,
    OrderStatus.ARCHIVED,
)

INITIAL_STATUS = OrderStatus.ACCEPTANCE
TERMINAL_STATUS = OrderStatus.ARCHIVED

# Reaching this stage also archives the order's client
ARCHIVE_TRIGGER_STATUS = OrderStatus.READY

_RANK: dict[str, int] = {stage.value: i for i, stage in enumerate(STAGES, start=1)}

# Older backend records spell the third stage "translation"
_LEGACY_ALIASES: dict[str, str] = {"translation": OrderStatus.TRANSLATING.value}


def normalize_status(status: str) -> str:
    """Map legacy spellings onto the canonical stage value."""
    return _LEGACY_ALIASES.get(status, status)


def parse_status(status: str) -> OrderStatus:
    """Canonical OrderStatus for a raw value; raises InvalidStatusError."""
    value = normalize_status(status)
    if value not in _RANK:
        raise InvalidStatusError(status)
    return OrderStatus(value)


def rank(status: str) -> int:
    """1-based position of a stage in the forward sequence."""
    return _RANK[parse_status(status).value]


def is_clickable(current: str, target: str) -> bool:
    return rank(target) >= rank(current) - 1


def check_transition(current: str, target: str) -> OrderStatus:
    """Validate current → target, returning the parsed target stage."""
    target_status = parse_status(target)
    if not is_clickable(current, target_status.value):
        raise IllegalTransitionError(normalize_status(current), target_status.value)
    return target_status


def allowed_targets(current: str) -> list[OrderStatus]:
    return [stage for stage in STAGES if is_clickable(current, stage.value)]


def next_stage(status: str) -> OrderStatus | None:
    """Following stage, or None at the terminal stage."""
    r = rank(status)
    return STAGES[r] if r < len(STAGES) else None


def previous_stage(status: str) -> OrderStatus | None:
    """Preceding stage, or None at the initial stage."""
    r = rank(status)
    return STAGES[r - 2] if r > 1 else None
