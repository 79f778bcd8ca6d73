"""Shift domain schemas - Pydantic models for validation"""

import datetime
from decimal import Decimal
from typing import Any, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class ShiftRecord(BaseModel):
    """Typed shift produced by the normalizer. Read-only."""

    model_config = ConfigDict(frozen=True)

    date: datetime.date
    start_time: datetime.time
    end_time: datetime.time
    hourly_rate: Optional[Decimal] = Field(None, ge=0)
    id: Optional[str] = None
    role: Optional[str] = None
    status: Optional[str] = None
    practice_postcode: Optional[str] = None


class ShiftInput(BaseModel):
    """Raw shift as sent by the marketplace API"""

    date: Optional[str] = None
    startTime: Optional[str] = None
    endTime: Optional[str] = None
    hourlyRate: Any = None  # raw; parse_rate validates it
    id: Optional[Union[str, int]] = None
    role: Optional[str] = None
    status: Optional[str] = None
    practicePostcode: Optional[str] = None


class ShiftSummaryRequest(BaseModel):
    """Schema for summarizing several shifts (timesheets, earnings widgets)"""

    shifts: list[ShiftInput]
    overtimeThreshold: Optional[int] = Field(None, ge=0, description="Weekly hours before overtime")


class EarningsResponse(BaseModel):
    hourly: float
    total: float


class ShiftResponse(BaseModel):
    id: Optional[str] = None
    date: datetime.date
    startTime: str
    endTime: str
    hourlyRate: Optional[float] = None
    role: Optional[str] = None
    status: Optional[str] = None
    practicePostcode: Optional[str] = None


class ShiftComputationResponse(BaseModel):
    """Schema for a computed shift"""

    shift: ShiftResponse
    durationHours: float
    durationMinutes: int
    overnight: bool
    shiftType: str
    earnings: EarningsResponse


class ShiftSummaryResponse(BaseModel):
    """Schema for a multi-shift summary"""

    shiftCount: int
    totalHours: float
    totalPay: float
    overtimeHours: float
    weeklyHours: dict[str, float]
