"""
Building Model

Represents a building owned by a company. Floor plans and their generated
apartments hang off it.
"""
from datetime import datetime
from sqlalchemy import Column, String, Integer, Text, DateTime, ForeignKey, UniqueConstraint, Index
from sqlalchemy.orm import relationship

from inventory_api.lib.database import Base
from inventory_api.models.column_types import JSONType


class Building(Base):
    __tablename__ = "buildings"

    id = Column(Integer, primary_key=True, autoincrement=True)
    company_id = Column(Integer, ForeignKey("companies.id", ondelete="CASCADE"), nullable=False)
    name = Column(String(255), nullable=False)
    address = Column(String(255), nullable=False)
    desktop_image = Column(Text, nullable=True)
    mobile_image = Column(Text, nullable=True)
    desktop_paths = Column(JSONType, nullable=False, default=dict)  # {"path-1": "M0 0 L10 10"}
    mobile_paths = Column(JSONType, nullable=False, default=dict)
    created_at = Column(DateTime, default=datetime.utcnow)

    company = relationship("Company", back_populates="buildings")
    floor_plans = relationship("FloorPlan", back_populates="building", cascade="all, delete-orphan")
    apartments = relationship("Apartment", back_populates="building", cascade="all, delete-orphan")

    __table_args__ = (
        UniqueConstraint('name', 'company_id', name='uq_building_name'),
        Index('ix_buildings_company', 'company_id'),
    )
