from typing import Optional
from datetime import date, datetime
from decimal import Decimal

from resource_planner.models.availability_exception import ExceptionType
from resource_planner.schemas.base import CamelModel


class ExceptionCreate(CamelModel):
    resource_id: int
    exception_date: date
    hours_available: Decimal
    exception_type: ExceptionType
    hourly_rate: Optional[Decimal] = None
    currency: Optional[str] = None
    start_time: Optional[str] = None  # HH:MM
    end_time: Optional[str] = None    # HH:MM
    is_active: bool = True
    notes: Optional[str] = None


class ExceptionUpdate(CamelModel):
    exception_date: Optional[date] = None
    hours_available: Optional[Decimal] = None
    exception_type: Optional[ExceptionType] = None
    hourly_rate: Optional[Decimal] = None
    currency: Optional[str] = None
    start_time: Optional[str] = None
    end_time: Optional[str] = None
    is_active: Optional[bool] = None
    notes: Optional[str] = None


class ExceptionResponse(CamelModel):
    id: int
    organization_id: int
    resource_id: int
    exception_date: date
    hours_available: float
    exception_type: ExceptionType
    hourly_rate: Optional[float] = None
    currency: Optional[str] = None
    start_time: Optional[str] = None
    end_time: Optional[str] = None
    is_active: bool
    notes: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
