"""
Booking status state machine.

    pending   -> confirmed | cancelled
    confirmed -> completed | cancelled
    completed, cancelled: terminal

Every transition names the party allowed to make it. A request is checked
against the graph first and against the actor's party second, so a move out
of a terminal status is always reported as an invalid state.
"""
import logging
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional

from smartconnect.core.exceptions import AuthorizationError, InvalidStateError

logger = logging.getLogger(__name__)


class BookingStatus(str, Enum):
    """Status of a booking"""
    PENDING = "pending"
    CONFIRMED = "confirmed"
    COMPLETED = "completed"
    CANCELLED = "cancelled"

    @property
    def is_terminal(self) -> bool:
        return self in (BookingStatus.COMPLETED, BookingStatus.CANCELLED)


class BookingParty(str, Enum):
    """Which side of a booking an actor is on."""
    PROVIDER = "provider"
    SEEKER = "seeker"


@dataclass(frozen=True)
class Transition:
    """A single valid status transition and the party that may make it."""
    from_status: BookingStatus
    to_status: BookingStatus
    party: BookingParty


TRANSITIONS: List[Transition] = [
    # Provider accepts, declines, or closes out
    Transition(BookingStatus.PENDING, BookingStatus.CONFIRMED, BookingParty.PROVIDER),
    Transition(BookingStatus.PENDING, BookingStatus.CANCELLED, BookingParty.PROVIDER),
    Transition(BookingStatus.CONFIRMED, BookingStatus.COMPLETED, BookingParty.PROVIDER),

    # Seeker withdraws
    Transition(BookingStatus.PENDING, BookingStatus.CANCELLED, BookingParty.SEEKER),
    Transition(BookingStatus.CONFIRMED, BookingStatus.CANCELLED, BookingParty.SEEKER),
]


def allowed_targets(current: BookingStatus, party: Optional[BookingParty] = None) -> List[BookingStatus]:
    """Statuses reachable from ``current``, optionally only by ``party``."""
    targets = []
    for t in TRANSITIONS:
        if t.from_status == current and (party is None or t.party == party):
            if t.to_status not in targets:
                targets.append(t.to_status)
    return targets


def check_transition(
    current: BookingStatus,
    target: BookingStatus,
    party: BookingParty,
) -> None:
    """
    Validate a requested status change.

    Raises:
        InvalidStateError: if ``current`` is terminal or the move is not in
            the graph.
        AuthorizationError: if the move exists but belongs to the other party.
    """
    if current.is_terminal:
        raise InvalidStateError(
            f"Booking is already {current.value} and cannot be changed"
        )

    valid = allowed_targets(current)
    if target not in valid:
        raise InvalidStateError(
            f"Cannot move booking from '{current.value}' to '{target.value}'. "
            f"Valid targets: {[s.value for s in valid]}"
        )

    if target not in allowed_targets(current, party):
        raise AuthorizationError(
            f"The {party.value} cannot move a booking from "
            f"'{current.value}' to '{target.value}'"
        )

    logger.debug("Status transition allowed: %s -> %s by %s", current.value, target.value, party.value)
