"""CarrierService model: a carrier's shipping product that owns rate cards."""

from enum import Enum

from sqlalchemy import Boolean, Column, DateTime, String, func
from sqlalchemy.orm import relationship

from storefront.core.database import Base
from storefront.models.shared import UUIDType, generate_uuid


class ServiceTier(str, Enum):
    SURFACE = "surface"
    EXPRESS = "express"
    PRIORITY = "priority"


class CarrierService(Base):
    __tablename__ = "carrier_services"

    id = Column(UUIDType, primary_key=True, default=generate_uuid)
    code = Column(String(50), unique=True, index=True, nullable=False)
    name = Column(String(255), nullable=False)
    carrier_name = Column(String(255), nullable=False)
    service_tier = Column(String(20), nullable=False, default=ServiceTier.SURFACE.value)
    is_active = Column(Boolean, nullable=False, default=True)

    rate_cards = relationship(
        "CarrierRateCard",
        back_populates="carrier_service",
        cascade="all, delete-orphan",
    )

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())
