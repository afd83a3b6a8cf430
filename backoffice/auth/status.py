"""Account status state machine.

Statuses are changed only by staff/admin acting on another principal. Any
non-deleted status may move to any other non-deleted status or to
``deleted``; ``deleted`` is terminal.
"""

from backoffice.errors import (
    AccountBlocked,
    AccountInactive,
    InvalidStatusTransition,
    PrincipalNotFound,
    UnknownStatus,
)
from backoffice.models.enums import AccountStatus

ALLOWED_TRANSITIONS: dict[AccountStatus, frozenset[AccountStatus]] = {
    AccountStatus.active: frozenset(
        {AccountStatus.inactive, AccountStatus.blocked, AccountStatus.deleted}
    ),
    AccountStatus.inactive: frozenset(
        {AccountStatus.active, AccountStatus.blocked, AccountStatus.deleted}
    ),
    AccountStatus.blocked: frozenset(
        {AccountStatus.active, AccountStatus.inactive, AccountStatus.deleted}
    ),
    AccountStatus.deleted: frozenset(),
}


def parse_status(value: object) -> AccountStatus:
    """Return the status named by ``value`` or raise :class:`UnknownStatus`."""
    if isinstance(value, AccountStatus):
        return value
    if not isinstance(value, str):
        raise UnknownStatus()
    try:
        return AccountStatus(value)
    except ValueError as err:
        raise UnknownStatus() from err


def can_transition(current: AccountStatus, target: AccountStatus) -> bool:
    if current == target:
        return current != AccountStatus.deleted
    return target in ALLOWED_TRANSITIONS[current]


def ensure_transition(current: AccountStatus, target: AccountStatus) -> None:
    if not can_transition(current, target):
        raise InvalidStatusTransition(
            f"Cannot change status from {current.value} to {target.value}"
        )


def enforce_access(status: AccountStatus) -> None:
    """Raise the error that ``status`` maps to at the access gate, if any."""
    match status:
        case AccountStatus.active:
            return
        case AccountStatus.inactive:
            raise AccountInactive()
        case AccountStatus.blocked:
            raise AccountBlocked()
        case AccountStatus.deleted:
            raise PrincipalNotFound()
