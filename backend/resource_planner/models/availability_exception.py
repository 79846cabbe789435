from sqlalchemy import (
    Column, Integer, String, ForeignKey, Boolean, Numeric, Date, Time, DateTime, UniqueConstraint,
    Enum as SQLEnum,
)
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
import enum

from resource_planner.core.database import Base


class ExceptionType(str, enum.Enum):
    VACATION = "vacation"
    SICK_LEAVE = "sick_leave"
    HOLIDAY = "holiday"
    TRAINING = "training"
    UNAVAILABLE = "unavailable"
    CUSTOM = "custom"


class ResourceAvailabilityException(Base):
    __tablename__ = "resource_availability_exceptions"
    __table_args__ = (
        UniqueConstraint("resource_id", "exception_date", name="uq_availability_exception_resource_date"),
    )

    id = Column(Integer, primary_key=True, index=True)
    organization_id = Column(Integer, ForeignKey("organizations.id", ondelete="CASCADE"), nullable=False, index=True)
    resource_id = Column(Integer, ForeignKey("resources.id", ondelete="CASCADE"), nullable=False, index=True)
    exception_date = Column(Date, nullable=False, index=True)
    start_time = Column(Time)
    end_time = Column(Time)
    hours_available = Column(Numeric(4, 2), nullable=False)  # 0 = fully unavailable
    hourly_rate = Column(Numeric(10, 2))  # None falls back to the resource rate
    currency = Column(String(3))  # None falls back to the resource currency
    exception_type = Column(SQLEnum(ExceptionType, values_callable=lambda obj: [e.value for e in obj]), nullable=False)
    is_active = Column(Boolean, default=True, nullable=False)
    notes = Column(String(1000))
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    # Relationships
    resource = relationship("Resource", back_populates="availability_exceptions")

    def __repr__(self):
        return f"<ResourceAvailabilityException(resource_id={self.resource_id}, date={self.exception_date}, type={self.exception_type}, active={self.is_active})>"
