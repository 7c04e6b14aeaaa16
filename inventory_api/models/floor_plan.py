"""
FloorPlan Model

Template for a floor range with a repeating per-floor layout. Apartments are
generated from it once per (building, name).
"""
from datetime import datetime
from sqlalchemy import (
    Column, String, Integer, Text, DateTime, ForeignKey, UniqueConstraint, CheckConstraint, Index,
)
from sqlalchemy.orm import relationship

from inventory_api.lib.database import Base
from inventory_api.models.column_types import JSONType


class FloorPlan(Base):
    __tablename__ = "floor_plans"

    id = Column(Integer, primary_key=True, autoincrement=True)
    building_id = Column(Integer, ForeignKey("buildings.id", ondelete="CASCADE"), nullable=False)
    name = Column(String(100), nullable=False)
    desktop_image = Column(Text, nullable=True)
    mobile_image = Column(Text, nullable=True)
    desktop_paths = Column(JSONType, nullable=False, default=dict)
    mobile_paths = Column(JSONType, nullable=False, default=dict)
    floor_range_start = Column(Integer, nullable=False)
    floor_range_end = Column(Integer, nullable=False)
    starting_apartment_number = Column(Integer, nullable=False)
    apartments_per_floor = Column(Integer, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    building = relationship("Building", back_populates="floor_plans")
    apartments = relationship("Apartment", back_populates="floor_plan", cascade="all, delete-orphan")

    __table_args__ = (
        UniqueConstraint('name', 'building_id', name='uq_floor_plan_name'),
        CheckConstraint('floor_range_end >= floor_range_start', name='ck_floor_plan_range'),
        CheckConstraint('starting_apartment_number >= 1', name='ck_floor_plan_start_number'),
        CheckConstraint('apartments_per_floor >= 1', name='ck_floor_plan_per_floor'),
        Index('ix_floor_plans_building', 'building_id'),
    )
