"""Shift router - FastAPI endpoints for shift calculations"""

import logging

from fastapi import APIRouter

from .normalizer import normalize_shift, normalize_shifts
from .schemas import (
    EarningsResponse,
    ShiftComputationResponse,
    ShiftInput,
    ShiftResponse,
    ShiftSummaryRequest,
    ShiftSummaryResponse,
)
from .service import ShiftComputation, compute_shift, summarize_shifts

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/shifts", tags=["Shifts"])


def _to_response(computation: ShiftComputation) -> ShiftComputationResponse:
    record = computation.record
    return ShiftComputationResponse(
        shift=ShiftResponse(
            id=record.id,
            date=record.date,
            startTime=record.start_time.strftime("%H:%M"),
            endTime=record.end_time.strftime("%H:%M"),
            hourlyRate=float(record.hourly_rate) if record.hourly_rate is not None else None,
            role=record.role,
            status=record.status,
            practicePostcode=record.practice_postcode,
        ),
        durationHours=computation.duration_hours,
        durationMinutes=computation.duration_minutes,
        overnight=computation.overnight,
        shiftType=computation.shift_type,
        earnings=EarningsResponse(
            hourly=float(computation.earnings.hourly),
            total=float(computation.earnings.total),
        ),
    )


@router.post("/compute", response_model=ShiftComputationResponse)
async def compute(data: ShiftInput):
    """Duration, shift type and earnings for a single shift"""
    record = normalize_shift(data.model_dump())
    return _to_response(compute_shift(record))


@router.post("/summary", response_model=ShiftSummaryResponse)
async def summary(data: ShiftSummaryRequest):
    """Total hours, pay and weekly overtime across several shifts"""
    records = normalize_shifts(shift.model_dump() for shift in data.shifts)
    result = summarize_shifts(records, overtime_threshold=data.overtimeThreshold)
    logger.info(f"Summarized {result.shift_count} shifts: {result.total_hours:.2f}h, £{result.total_pay}")
    return ShiftSummaryResponse(
        shiftCount=result.shift_count,
        totalHours=result.total_hours,
        totalPay=float(result.total_pay),
        overtimeHours=result.overtime_hours,
        weeklyHours=result.weekly_hours,
    )
