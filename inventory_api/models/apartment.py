"""
Apartment Model

One generated unit of a floor plan.

flat_id is the layout slot on a floor (1..apartments_per_floor, repeated on
every floor); flat_number is the public number, counted across the whole
floor range without resetting.
"""
from decimal import Decimal
from sqlalchemy import (
    Column, String, Integer, Text, Numeric, ForeignKey, UniqueConstraint, CheckConstraint, Index,
)
from sqlalchemy.orm import relationship

from inventory_api.lib.database import Base

APARTMENT_STATUSES = ("free", "reserved", "sold")


class Apartment(Base):
    __tablename__ = "apartments"

    id = Column(Integer, primary_key=True, autoincrement=True)
    flat_id = Column(Integer, nullable=False)
    flat_number = Column(Integer, nullable=False)
    floor = Column(Integer, nullable=False)
    building_id = Column(Integer, ForeignKey("buildings.id", ondelete="CASCADE"), nullable=False)
    floor_plan_id = Column(Integer, ForeignKey("floor_plans.id", ondelete="CASCADE"), nullable=False)
    name = Column(String(255), nullable=False)  # floor plan label copied for grouping
    status = Column(String(20), nullable=False, default="free")
    image = Column(Text, nullable=True)
    square_meters = Column(Numeric(10, 2), nullable=False, default=Decimal("0"))

    building = relationship("Building", back_populates="apartments")
    floor_plan = relationship("FloorPlan", back_populates="apartments")

    __table_args__ = (
        UniqueConstraint(
            'building_id', 'name', 'floor_plan_id', 'floor', 'flat_number',
            name='uq_apartment_position',
        ),
        CheckConstraint(
            "status IN ('free', 'reserved', 'sold')",
            name='ck_apartment_status',
        ),
        Index('ix_apartments_building', 'building_id'),
        Index('ix_apartments_scope', 'building_id', 'name', 'floor_plan_id'),
        Index('ix_apartments_slot', 'floor_plan_id', 'flat_id'),
        Index('ix_apartments_number', 'floor_plan_id', 'flat_number'),
    )
