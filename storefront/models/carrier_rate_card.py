"""CarrierRateCard model: per-zone, per-weight-slab carrier pricing."""

from sqlalchemy import Boolean, Column, Date, DateTime, ForeignKey, String, func
from sqlalchemy.orm import relationship

from storefront.core.database import Base
from storefront.models.shared import MONEY, PERCENT, WEIGHT, UUIDType, generate_uuid


class CarrierRateCard(Base):
    __tablename__ = "carrier_rate_cards"

    id = Column(UUIDType, primary_key=True, default=generate_uuid)
    carrier_service_id = Column(
        UUIDType,
        ForeignKey("carrier_services.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    zone_code = Column(String(20), nullable=False, index=True)

    weight_min = Column(WEIGHT, nullable=False, default=0)
    weight_max = Column(WEIGHT, nullable=True)

    base_rate = Column(MONEY, nullable=False, default=0)
    additional_per_kg = Column(MONEY, nullable=False, default=0)
    additional_per_500g = Column(MONEY, nullable=False, default=0)

    fuel_surcharge_percent = Column(PERCENT, nullable=False, default=0)
    gst_percent = Column(PERCENT, nullable=False, default=0)
    handling_charge = Column(MONEY, nullable=False, default=0)
    oda_charge = Column(MONEY, nullable=False, default=0)

    cod_charge_fixed = Column(MONEY, nullable=False, default=0)
    cod_charge_percent = Column(PERCENT, nullable=False, default=0)
    min_cod_charge = Column(MONEY, nullable=False, default=0)

    insurance_percent = Column(PERCENT, nullable=False, default=0)
    min_insurance_charge = Column(MONEY, nullable=False, default=0)

    rto_charge = Column(MONEY, nullable=False, default=0)
    rto_percent = Column(PERCENT, nullable=False, default=0)

    effective_from = Column(Date, nullable=False)
    effective_to = Column(Date, nullable=True)
    is_active = Column(Boolean, nullable=False, default=True)

    carrier_service = relationship("CarrierService", back_populates="rate_cards")

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())
