from sqlalchemy import Column, Integer, String, ForeignKey, Boolean, Numeric, Time, DateTime, UniqueConstraint
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from resource_planner.core.database import Base


class ResourceWorkSchedule(Base):
    """One day of a resource's weekly pattern. A full pattern is 7 rows."""

    __tablename__ = "resource_work_schedules"
    __table_args__ = (
        UniqueConstraint("resource_id", "day_of_week", name="uq_work_schedule_resource_day"),
    )

    id = Column(Integer, primary_key=True, index=True)
    resource_id = Column(Integer, ForeignKey("resources.id", ondelete="CASCADE"), nullable=False, index=True)
    day_of_week = Column(Integer, nullable=False)  # 0=Monday, 6=Sunday
    is_active = Column(Boolean, default=True, nullable=False)
    start_time = Column(Time, nullable=False)
    end_time = Column(Time, nullable=False)
    hourly_rate = Column(Numeric(10, 2))  # None falls back to the resource rate
    currency = Column(String(3), nullable=False, default="USD")
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    # Relationships
    resource = relationship("Resource", back_populates="work_schedules")

    def __repr__(self):
        return f"<ResourceWorkSchedule(resource_id={self.resource_id}, day={self.day_of_week}, active={self.is_active})>"
