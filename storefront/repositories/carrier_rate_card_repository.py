"""CarrierRateCard repository for data access."""

from uuid import UUID

from sqlalchemy.orm import Session

from storefront.models.carrier_rate_card import CarrierRateCard
from storefront.schemas.carrier import CarrierRateCardCreate, CarrierRateCardUpdate


class CarrierRateCardRepository:
    """Repository for CarrierRateCard model."""

    def __init__(self, db: Session):
        self.db = db

    def get_by_service_id(self, carrier_service_id: UUID) -> list[CarrierRateCard]:
        """Get the rate cards of a carrier service ordered by zone and weight."""
        return (
            self.db.query(CarrierRateCard)
            .filter(CarrierRateCard.carrier_service_id == carrier_service_id)
            .order_by(CarrierRateCard.zone_code.asc(), CarrierRateCard.weight_min.asc())
            .all()
        )

    def get_by_id(self, rate_card_id: UUID) -> CarrierRateCard | None:
        return self.db.query(CarrierRateCard).filter(CarrierRateCard.id == rate_card_id).first()

    def create(self, carrier_service_id: UUID, data: CarrierRateCardCreate) -> CarrierRateCard:
        """Create a rate card for a carrier service."""
        card = CarrierRateCard(carrier_service_id=carrier_service_id, **data.model_dump())
        self.db.add(card)
        self.db.commit()
        self.db.refresh(card)
        return card

    def update(self, rate_card_id: UUID, data: CarrierRateCardUpdate) -> CarrierRateCard | None:
        card = self.get_by_id(rate_card_id)
        if not card:
            return None

        update_data = data.model_dump(exclude_unset=True)
        for key, value in update_data.items():
            setattr(card, key, value)

        self.db.commit()
        self.db.refresh(card)
        return card

    def delete(self, rate_card_id: UUID) -> bool:
        card = self.get_by_id(rate_card_id)
        if not card:
            return False

        self.db.delete(card)
        self.db.commit()
        return True
