"""DeliveryOption model: delivery speed tiers priced on top of base shipping."""

from sqlalchemy import JSON, Boolean, Column, DateTime, Integer, String, Text, func

from storefront.core.database import Base
from storefront.models.shared import MONEY, PERCENT, UUIDType, generate_uuid


class DeliveryOption(Base):
    __tablename__ = "delivery_options"

    id = Column(UUIDType, primary_key=True, default=generate_uuid)
    code = Column(String(50), unique=True, index=True, nullable=False)
    name = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)

    delivery_days_min = Column(Integer, nullable=False, default=1)
    delivery_days_max = Column(Integer, nullable=False, default=1)
    price_multiplier = Column(PERCENT, nullable=False, default=1)
    fixed_surcharge = Column(MONEY, nullable=False, default=0)

    # NULL or empty list means every zone
    availability_zones = Column(JSON, nullable=True)
    availability_conditions = Column(JSON, nullable=True)
    cutoff_time = Column(String(8), nullable=True)
    # Weekday numbers, 0 = Sunday
    restricted_days = Column(JSON, nullable=True)
    min_order_value = Column(MONEY, nullable=False, default=0)

    is_active = Column(Boolean, nullable=False, default=True)
    sort_order = Column(Integer, nullable=False, default=0)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())
