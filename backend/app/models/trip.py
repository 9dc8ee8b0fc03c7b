"""
Trip database model.

A trip moves a set of bookings on one vehicle. Vehicle, driver and booking
references carry no foreign keys: linking is lenient unless strict reference
checking is switched on in settings.
"""

from sqlalchemy import Column, Integer, String, Float, DateTime, ForeignKey, Enum
from sqlalchemy.sql import func
from backend.app.db.session import Base
from backend.app.models.trip_enums import TripStatus


class Trip(Base):
    """
    Trip model.
    """
    __tablename__ = "trips"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    trip_code = Column(String(64), unique=True, nullable=False, index=True)

    # Assignment
    vehicle_id = Column(Integer, nullable=False, index=True)
    driver_id = Column(Integer, nullable=False, index=True)
    co_driver_id = Column(Integer, nullable=True)

    # Route
    origin = Column(String(200), nullable=True)
    destination = Column(String(200), nullable=True)
    departure_time = Column(DateTime(timezone=True), nullable=True)
    arrival_time = Column(DateTime(timezone=True), nullable=True)

    # Recorded after the fact
    fuel_used = Column(Float, nullable=True)
    distance = Column(Float, nullable=True)

    status = Column(Enum(TripStatus), default=TripStatus.SCHEDULED, nullable=False, index=True)

    # Compliance
    border_control_permit = Column(String(200), nullable=True)
    tax_valuation_payment = Column(Float, nullable=True)
    delivery_confirmation_receipt = Column(String(200), nullable=True)

    # Timestamps
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False, index=True)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    @property
    def route(self) -> dict:
        return {
            "origin": self.origin,
            "destination": self.destination,
            "departure_time": self.departure_time,
            "arrival_time": self.arrival_time,
        }

    def __repr__(self):
        return f"<Trip(id={self.id}, code='{self.trip_code}', status='{self.status.value}')>"


class TripBooking(Base):
    """
    Ordered link between a trip and the bookings it carries.
    """
    __tablename__ = "trip_bookings"

    id = Column(Integer, primary_key=True, autoincrement=True)
    trip_id = Column(Integer, ForeignKey('trips.id', ondelete="CASCADE"), nullable=False, index=True)
    booking_id = Column(Integer, nullable=False, index=True)
    position = Column(Integer, nullable=False)

    def __repr__(self):
        return f"<TripBooking(trip_id={self.trip_id}, booking_id={self.booking_id}, position={self.position})>"
