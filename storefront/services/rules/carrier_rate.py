"""Carrier rate card selection and shipping charge breakdowns."""

from collections.abc import Iterable
from datetime import date
from decimal import ROUND_CEILING, Decimal

from storefront.schemas.carrier import (
    CarrierServiceRates,
    RateBreakdown,
    RateCard,
    ShipmentOptions,
    ShippingQuote,
)
from storefront.services.rules.money import ZERO, percent_of, round_money


def is_effective(card: RateCard, on: date) -> bool:
    if not card.is_active:
        return False
    if card.effective_from > on:
        return False
    if card.effective_to is not None and card.effective_to < on:
        return False
    return True


def is_weight_in_range(card: RateCard, weight: Decimal) -> bool:
    if weight < card.weight_min:
        return False
    if card.weight_max is not None and weight > card.weight_max:
        return False
    return True


def select_rate_card(
    cards: Iterable[RateCard],
    zone: str,
    weight: Decimal,
    on: date,
) -> RateCard | None:
    """Pick the card for a zone and weight.

    When slabs overlap, the narrowest match (highest weight_min) wins, then
    the most recently effective card.
    """
    matching = [
        card
        for card in cards
        if card.zone_code == zone and is_effective(card, on) and is_weight_in_range(card, weight)
    ]
    if not matching:
        return None
    return max(matching, key=lambda card: (card.weight_min, card.effective_from))


def base_charge(card: RateCard, weight: Decimal) -> Decimal:
    charge = card.base_rate
    if weight <= card.weight_min:
        return charge

    extra = weight - card.weight_min
    if card.additional_per_kg > 0:
        return charge + extra * card.additional_per_kg
    if card.additional_per_500g > 0:
        # Partial half-kilograms are billed as whole ones
        steps = (extra * 2).to_integral_value(rounding=ROUND_CEILING)
        return charge + steps * card.additional_per_500g
    return charge


def calculate_charge(card: RateCard, weight: Decimal, options: ShipmentOptions) -> RateBreakdown:
    """Itemize the charge for one shipment.

    Components are summed unrounded and the subtotal, GST and total are each
    rounded once, so the rounded components may not add up to the subtotal
    to the paisa.
    """
    base = base_charge(card, weight)
    fuel = percent_of(base, card.fuel_surcharge_percent)
    handling = card.handling_charge

    oda = ZERO
    if options.is_oda and card.oda_charge > 0:
        oda = card.oda_charge

    cod = ZERO
    if options.is_cod:
        cod = card.cod_charge_fixed
        if card.cod_charge_percent > 0 and options.cod_amount > 0:
            cod += percent_of(options.cod_amount, card.cod_charge_percent)
        cod = max(cod, card.min_cod_charge)

    insurance = ZERO
    if options.insurance_value > 0:
        insurance = percent_of(options.insurance_value, card.insurance_percent)
        insurance = max(insurance, card.min_insurance_charge)

    subtotal = base + fuel + handling + oda + cod + insurance
    gst = percent_of(subtotal, card.gst_percent)
    return RateBreakdown(
        base=round_money(base),
        fuel_surcharge=round_money(fuel),
        handling=round_money(handling),
        oda=round_money(oda),
        cod=round_money(cod),
        insurance=round_money(insurance),
        subtotal=round_money(subtotal),
        gst=round_money(gst),
        total=round_money(subtotal + gst),
    )


def quote_rates(
    services: Iterable[CarrierServiceRates],
    zone: str,
    weight: Decimal,
    options: ShipmentOptions,
    on: date,
) -> list[ShippingQuote]:
    """One quote per active carrier service that serves the zone, cheapest first."""
    quotes: list[ShippingQuote] = []
    for service in services:
        if not service.is_active:
            continue
        card = select_rate_card(service.rate_cards, zone, weight, on)
        if card is None:
            continue
        quotes.append(
            ShippingQuote(
                carrier_service_id=service.id,
                carrier_service_code=service.code,
                carrier_name=service.carrier_name,
                service_name=service.name,
                service_tier=service.service_tier,
                rate_card_id=card.id,
                zone_code=zone,
                weight=weight,
                breakdown=calculate_charge(card, weight, options),
            )
        )
    return sorted(quotes, key=lambda quote: (quote.total, quote.carrier_service_code))
