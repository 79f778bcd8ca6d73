"""Shift domain - duration, earnings and overtime for locum shifts"""

from .calculator import Earnings, ZeroLengthPolicy, compute_duration_hours, compute_earnings
from .normalizer import normalize_shift, normalize_shifts
from .router import router
from .schemas import ShiftRecord
from .service import can_cancel, classify_shift_type, compute_shift, summarize_shifts

__all__ = [
    "Earnings",
    "ShiftRecord",
    "ZeroLengthPolicy",
    "can_cancel",
    "classify_shift_type",
    "compute_duration_hours",
    "compute_earnings",
    "compute_shift",
    "normalize_shift",
    "normalize_shifts",
    "router",
    "summarize_shifts",
]
