from sqlalchemy import Column, Integer, String, ForeignKey, Boolean, Numeric, DateTime, Enum as SQLEnum
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
import enum

from resource_planner.core.database import Base


class ResourceType(str, enum.Enum):
    HUMAN = "human"
    MATERIAL = "material"
    EQUIPMENT = "equipment"


class Resource(Base):
    __tablename__ = "resources"

    id = Column(Integer, primary_key=True, index=True)
    organization_id = Column(Integer, ForeignKey("organizations.id", ondelete="CASCADE"), nullable=False, index=True)
    name = Column(String(256), nullable=False)
    type = Column(SQLEnum(ResourceType, values_callable=lambda obj: [e.value for e in obj]), default=ResourceType.HUMAN, nullable=False, index=True)
    hourly_rate = Column(Numeric(10, 2), nullable=False)
    daily_work_hours = Column(Numeric(4, 2), nullable=False, default=8)
    currency = Column(String(3), nullable=False, default="USD")
    is_active = Column(Boolean, default=True, nullable=False, index=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    # Relationships
    organization = relationship("Organization", back_populates="resources")
    work_schedules = relationship(
        "ResourceWorkSchedule", back_populates="resource", cascade="all, delete-orphan",
        order_by="ResourceWorkSchedule.day_of_week",
    )
    availability_exceptions = relationship(
        "ResourceAvailabilityException", back_populates="resource", cascade="all, delete-orphan",
    )

    def __repr__(self):
        return f"<Resource(id={self.id}, name={self.name}, type={self.type}, organization_id={self.organization_id})>"
