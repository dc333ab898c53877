"""
Pricing Engine - turns line items and a rate card into quotation totals.

Pricing formula per line item:
    area       = width × height                      (sq ft, ≤ 0 prices at 0)
    base rate  = material + finish + labor            (per sq ft)
    unit cost  = base rate × area × hardware multiplier
    amount     = unit cost × qty

Labor is folded into the base rate before the hardware multiplier is
applied. No rounding happens here; amounts are rounded only for display.
"""
import logging
from typing import Optional

from .models import LineItem, RateConfiguration, Project, Totals, RoomTotal, LineBreakdown

logger = logging.getLogger(__name__)


def price_line_item(item: LineItem, rates: RateConfiguration) -> float:
    """Price a single line item against a rate card."""
    area = item.width * item.height
    if area <= 0:
        return 0.0

    base_rate = rates.material_rate(item.material) + rates.finish_rate(item.finish) + rates.labor_rate_sqft
    unit_cost = base_rate * area * rates.hardware_multiplier(item.hardware)
    return unit_cost * item.qty


def compute_totals(project: Project) -> Totals:
    """
    Compute item, room, sub, tax and grand totals for a project.

    The subtotal is the sum of the room totals, tax is a flat percentage of
    the subtotal and the fixed design fee is added on top.
    """
    rates = project.rates
    item_totals = {}
    room_totals = []

    for room in project.rooms:
        room_total = 0.0
        for item in room.items:
            amount = price_line_item(item, rates)
            item_totals[(room.id, item.id)] = amount
            room_total += amount
        room_totals.append(RoomTotal(id=room.id, total=room_total))

    subtotal = sum(rt.total for rt in room_totals)
    tax = subtotal * (rates.tax_rate / 100)
    grand_total = subtotal + tax + rates.design_fee_fixed

    return Totals(
        subtotal=subtotal,
        tax=tax,
        grand_total=grand_total,
        room_totals=tuple(room_totals),
        item_totals=item_totals,
    )


def explain_line_item(item: LineItem, rates: RateConfiguration) -> LineBreakdown:
    """
    Price a line item and record every intermediate value.

    Unknown material, finish and hardware keys are reported as warnings;
    they still price as 0, 0 and ×1 respectively.
    """
    area = item.width * item.height
    material_rate = rates.material_rate(item.material)
    finish_rate = rates.finish_rate(item.finish)
    multiplier = rates.hardware_multiplier(item.hardware)
    base_rate = material_rate + finish_rate + rates.labor_rate_sqft

    breakdown = LineBreakdown(
        item_id=item.id,
        area=area,
        material_rate=material_rate,
        finish_rate=finish_rate,
        labor_rate=rates.labor_rate_sqft,
        base_rate=base_rate,
        hardware_multiplier=multiplier,
        unit_cost=0.0,
        qty=item.qty,
        amount=0.0,
    )

    breakdown.add_trace("Area", f"{item.width:g} ft × {item.height:g} ft", f"{area:g} sq ft")

    if item.material not in rates.materials:
        breakdown.add_warning(f"Unknown material '{item.material}' priced at 0")
        logger.debug("Material %r not in rate card, defaulting to 0", item.material)
    breakdown.add_trace("Material", item.material or "(none)", f"{material_rate:g}/sq ft")

    if item.finish not in rates.finishes:
        breakdown.add_warning(f"Unknown finish '{item.finish}' priced at 0")
        logger.debug("Finish %r not in rate card, defaulting to 0", item.finish)
    breakdown.add_trace("Finish", item.finish or "(none)", f"{finish_rate:g}/sq ft")

    breakdown.add_trace("Labor", "Flat labor rate", f"{rates.labor_rate_sqft:g}/sq ft")
    breakdown.add_trace("Base Rate", "Material + finish + labor", f"{base_rate:g}/sq ft")

    if item.hardware not in rates.hardware_multipliers:
        breakdown.add_warning(f"Unknown hardware tier '{item.hardware}' uses multiplier 1")
        logger.debug("Hardware tier %r not in rate card, defaulting to 1", item.hardware)
    breakdown.add_trace("Hardware", item.hardware or "(none)", f"×{multiplier:g}")

    if area <= 0:
        breakdown.add_trace("Zero Area", "Width × height is not positive, item priced at 0")
        return breakdown

    breakdown.unit_cost = base_rate * area * multiplier
    breakdown.amount = breakdown.unit_cost * item.qty
    breakdown.add_trace("Unit Cost", f"{base_rate:g} × {area:g} × {multiplier:g}", f"{breakdown.unit_cost:g}")
    breakdown.add_trace("Extension", f"Quantity {item.qty} × {breakdown.unit_cost:g}", f"{breakdown.amount:g}")

    return breakdown


class PricingEngine:
    """
    Memoizing front for compute_totals.

    Totals are cached against the project's content fingerprint, which
    covers every room, item and the rate card. Any edit changes the
    fingerprint, so stale totals are never returned.
    """

    def __init__(self):
        self._cache_key: Optional[str] = None
        self._cached: Optional[Totals] = None
        self.hits = 0
        self.misses = 0

    def totals(self, project: Project) -> Totals:
        key = project.fingerprint()
        if key == self._cache_key and self._cached is not None:
            self.hits += 1
            return self._cached

        self.misses += 1
        self._cached = compute_totals(project)
        self._cache_key = key
        return self._cached
