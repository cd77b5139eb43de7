from datetime import datetime


def intervals_overlap(a_start: datetime, a_end: datetime, b_start: datetime, b_end: datetime) -> bool:
    """Strict open-interval intersection. Intervals that only touch (a_end == b_start)
    do not overlap, so back-to-back bookings are allowed."""
    return a_start < b_end and a_end > b_start
