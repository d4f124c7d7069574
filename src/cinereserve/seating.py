"""Fixed seating layout shared by every room."""

import math
import re

ROWS = "ABCDEFGH"
SEATS_PER_ROW = 10
ROOM_CAPACITY = len(ROWS) * SEATS_PER_ROW  # 80

_SEAT_RE = re.compile(r"^([A-Z])(\d{1,2})$")


def is_valid_seat(seat_number: str) -> bool:
    """
    Check a seat label against the 8×10 layout.

    Labels are ``<row-letter><seat-number>``, e.g. ``"A1"`` to ``"H10"``.
    """
    match = _SEAT_RE.match(seat_number.strip().upper())
    if not match:
        return False
    row, number = match.groups()
    return row in ROWS and 1 <= int(number) <= SEATS_PER_ROW


def occupancy_rate(reserved: int, capacity: int = ROOM_CAPACITY) -> int:
    """Reserved seats as a rounded percentage of capacity."""
    if capacity <= 0:
        return 0
    # half-up rounding, so 2 of 80 seats reads as 3%
    return math.floor(reserved * 100 / capacity + 0.5)
