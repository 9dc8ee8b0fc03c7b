"""
Booking database model.

A booking is a cargo shipment ordered by a client. The nested cargo details
and route are stored as flat columns and exposed as dicts for the API.
"""

from sqlalchemy import Column, Integer, String, Float, DateTime, ForeignKey, Enum
from sqlalchemy.sql import func
from backend.app.db.session import Base
from backend.app.models.booking_enums import BookingStatus, PaymentStatus, CargoType


class Booking(Base):
    """
    Booking model.

    ``client_id`` is set from the caller's token at creation and never
    reassigned.
    """
    __tablename__ = "bookings"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)

    # Airway bill (human-facing tracking code)
    airway_bill = Column(String(64), unique=True, nullable=False, index=True)

    # Ownership
    client_id = Column(Integer, ForeignKey('users.id'), nullable=False, index=True)

    # Cargo details
    cargo_description = Column(String(500), nullable=False)
    cargo_weight = Column(Float, nullable=False)
    cargo_length = Column(Float, nullable=True)
    cargo_width = Column(Float, nullable=True)
    cargo_height = Column(Float, nullable=True)
    cargo_type = Column(Enum(CargoType), default=CargoType.GENERAL, nullable=False)

    # Route
    origin = Column(String(200), nullable=False)
    destination = Column(String(200), nullable=False)
    departure_date = Column(DateTime(timezone=True), nullable=False)
    arrival_date = Column(DateTime(timezone=True), nullable=False)

    # Status
    status = Column(Enum(BookingStatus), default=BookingStatus.PENDING, nullable=False, index=True)
    price = Column(Float, nullable=False)
    payment_status = Column(Enum(PaymentStatus), default=PaymentStatus.PENDING, nullable=False, index=True)

    # Timestamps
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False, index=True)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    @property
    def cargo_details(self) -> dict:
        dimensions = None
        if any(v is not None for v in (self.cargo_length, self.cargo_width, self.cargo_height)):
            dimensions = {
                "length": self.cargo_length,
                "width": self.cargo_width,
                "height": self.cargo_height,
            }
        return {
            "description": self.cargo_description,
            "weight": self.cargo_weight,
            "dimensions": dimensions,
            "type": self.cargo_type,
        }

    @property
    def route(self) -> dict:
        return {
            "origin": self.origin,
            "destination": self.destination,
            "departure_date": self.departure_date,
            "arrival_date": self.arrival_date,
        }

    def __repr__(self):
        return f"<Booking(id={self.id}, awb='{self.airway_bill}', status='{self.status.value}')>"
