"""TaxConfiguration model for configurable tax rules."""

from enum import Enum

from sqlalchemy import JSON, Boolean, Column, DateTime, Integer, String, Text, func

from storefront.core.database import Base
from storefront.models.shared import PERCENT, UUIDType, generate_uuid


class TaxType(str, Enum):
    GST = "gst"
    VAT = "vat"
    SALES = "sales"
    CESS = "cess"
    OTHER = "other"


class TaxApplyOn(str, Enum):
    SUBTOTAL = "subtotal"
    SUBTOTAL_WITH_CHARGES = "subtotal_with_charges"
    SUBTOTAL_WITH_SHIPPING = "subtotal_with_shipping"
    SUBTOTAL_WITH_ALL = "subtotal_with_all"


class TaxConfiguration(Base):
    """Tax rule applied on top of (or extracted from) the order subtotal."""

    __tablename__ = "tax_configurations"

    id = Column(UUIDType, primary_key=True, default=generate_uuid)
    code = Column(String(50), unique=True, index=True, nullable=False)
    name = Column(String(255), nullable=False)
    tax_type = Column(String(20), nullable=False, default=TaxType.GST.value)
    rate = Column(PERCENT, nullable=False)
    is_enabled = Column(Boolean, nullable=False, default=True)
    is_inclusive = Column(Boolean, nullable=False, default=False)
    apply_on = Column(String(30), nullable=False, default=TaxApplyOn.SUBTOTAL.value)
    conditions = Column(JSON, nullable=True)
    priority = Column(Integer, nullable=False, default=0)
    description = Column(Text, nullable=True)
    display_label = Column(String(255), nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())
