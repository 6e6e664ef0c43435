"""ShippingInsurance model: optional or mandatory transit insurance plans."""

from sqlalchemy import JSON, Boolean, Column, DateTime, Integer, String, Text, func

from storefront.core.database import Base
from storefront.models.shared import MONEY, PERCENT, UUIDType, generate_uuid


class ShippingInsurance(Base):
    __tablename__ = "shipping_insurance"

    id = Column(UUIDType, primary_key=True, default=generate_uuid)
    name = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)

    min_order_value = Column(MONEY, nullable=False, default=0)
    max_order_value = Column(MONEY, nullable=True)
    coverage_percentage = Column(PERCENT, nullable=False, default=100)
    premium_percentage = Column(PERCENT, nullable=False, default=0)
    minimum_premium = Column(MONEY, nullable=False, default=0)
    maximum_premium = Column(MONEY, nullable=True)

    is_mandatory = Column(Boolean, nullable=False, default=False)
    conditions = Column(JSON, nullable=True)
    is_active = Column(Boolean, nullable=False, default=True)
    claim_processing_days = Column(Integer, nullable=False, default=7)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())
