"""
Input validation schemas using Pydantic for the ClassSync API.
"""
from pydantic import BaseModel, Field, field_validator
from typing import List, Optional
from datetime import date as _date

from classsync.domain.ClassSchedule import ClassSchedule
from classsync.utilities.constants import MAX_DURATION_MONTHS

TIME_PATTERN = r'^([01]\d|2[0-3]):[0-5]\d$'


class ScheduleInput(BaseModel):
    """One weekly slot: weekday (Sunday=0 .. Saturday=6) and HH:MM time."""
    day_of_week: int = Field(..., ge=0, le=6)
    time: str = Field("14:00", pattern=TIME_PATTERN)

    def to_domain(self) -> ClassSchedule:
        return ClassSchedule(self.day_of_week, self.time)


def _strip_name(v):
    if isinstance(v, str):
        v = v.strip()
        if not v:
            raise ValueError('Student name cannot be empty')
    return v


class PlanCreateInput(BaseModel):
    """Schema for creating a plan."""
    student_name: str = Field(..., min_length=1, max_length=200)
    start_date: _date
    duration_months: int = Field(6, ge=1, le=MAX_DURATION_MONTHS)
    schedules: List[ScheduleInput] = Field(..., min_length=1)

    @field_validator('student_name')
    @classmethod
    def validate_name(cls, v):
        return _strip_name(v)


class PlanUpdateInput(BaseModel):
    """Schema for editing a plan's name and/or weekly schedule (quota stays frozen).

    effective_from: first day the new schedule applies; defaults to the day after the latest record.
    """
    student_name: Optional[str] = Field(None, max_length=200)
    schedules: Optional[List[ScheduleInput]] = Field(None, min_length=1)
    effective_from: Optional[_date] = None

    @field_validator('student_name')
    @classmethod
    def validate_name(cls, v):
        return _strip_name(v)


class AttendanceInput(BaseModel):
    """Schema for marking a class as attended."""
    date: _date
    time: Optional[str] = Field(None, pattern=TIME_PATTERN)
    note: Optional[str] = Field(None, max_length=500)


class CancellationInput(BaseModel):
    """Schema for cancelling a class; extends_plan=False forfeits the slot."""
    date: _date
    extends_plan: bool = True
    reason: Optional[str] = Field(None, max_length=500)
    time: Optional[str] = Field(None, pattern=TIME_PATTERN)

    @field_validator('reason')
    @classmethod
    def strip_reason(cls, v):
        """Remove leading/trailing whitespace."""
        return v.strip() if isinstance(v, str) else v


class SyncConfigInput(BaseModel):
    url: str = Field(..., min_length=1)
    key: str = Field(..., min_length=1)

    @field_validator('url')
    @classmethod
    def validate_url(cls, v):
        v = v.strip()
        if not v.startswith(('http://', 'https://')):
            raise ValueError('Sync URL must start with http:// or https://')
        return v
