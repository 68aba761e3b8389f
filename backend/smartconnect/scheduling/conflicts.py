"""
Conflict Resolution

Removes candidate windows that overlap an existing booking. Only active
bookings (status other than cancelled) count; cancelled bookings stay in
the store for history but never block a slot.
"""
from dataclasses import dataclass
from typing import Iterable, List

from smartconnect.scheduling.status import BookingStatus
from smartconnect.scheduling.windows import TimeWindow


@dataclass(frozen=True)
class BookedRange:
    """The part of a booking the resolver needs."""
    window: TimeWindow
    status: BookingStatus = BookingStatus.PENDING

    @property
    def is_active(self) -> bool:
        return self.status != BookingStatus.CANCELLED


def filter_available(
    windows: Iterable[TimeWindow],
    bookings: Iterable[BookedRange],
) -> List[TimeWindow]:
    """
    Keep the windows that do not overlap any active booking.

    Overlap is half-open: ``[s, e)`` and ``[bs, be)`` conflict iff
    ``s < be and e > bs``, so back-to-back appointments are allowed.
    Input order is preserved.
    """
    busy = [b.window for b in bookings if b.is_active]
    if not busy:
        return list(windows)
    return [w for w in windows if not any(w.overlaps(b) for b in busy)]


def is_window_free(window: TimeWindow, bookings: Iterable[BookedRange]) -> bool:
    return bool(filter_available([window], bookings))
