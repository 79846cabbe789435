from sqlalchemy import Column, Integer, String, Text, DateTime
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from resource_planner.core.database import Base


class Organization(Base):
    __tablename__ = "organizations"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(256), nullable=False, index=True)
    slug = Column(String(100), unique=True, index=True, nullable=False)
    description = Column(Text)
    timezone = Column(String(50), nullable=False, default="UTC")  # IANA label
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    # Relationships
    resources = relationship("Resource", back_populates="organization")

    def __repr__(self):
        return f"<Organization(id={self.id}, slug={self.slug}, timezone={self.timezone})>"
