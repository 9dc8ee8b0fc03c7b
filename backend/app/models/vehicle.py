"""
Vehicle (fleet) database model.
"""

from sqlalchemy import Column, Integer, String, Float, DateTime, ForeignKey, Enum
from sqlalchemy.sql import func
from backend.app.db.session import Base
from backend.app.models.vehicle_enums import VehicleType, VehicleStatus


class Vehicle(Base):
    """
    Vehicle model.

    Planes, ships, trains and trucks of the fleet. ``vehicle_code`` is the
    fleet identifier shown to operators.
    """
    __tablename__ = "vehicles"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    vehicle_code = Column(String(100), unique=True, nullable=False, index=True)
    vehicle_type = Column(Enum(VehicleType), nullable=False)
    model = Column(String(100), nullable=True)
    capacity = Column(Float, nullable=True)

    status = Column(Enum(VehicleStatus), default=VehicleStatus.OPERATING, nullable=False, index=True)
    current_location = Column(String(200), nullable=True)

    assigned_driver_id = Column(Integer, ForeignKey('users.id'), nullable=True, index=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    def __repr__(self):
        return f"<Vehicle(id={self.id}, code='{self.vehicle_code}', status='{self.status.value}')>"
