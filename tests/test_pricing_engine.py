"""
Pricing engine tests: line item formula, aggregation and the worked
quotation examples.
"""
import pytest

from interior_quote.engine import (
    PricingEngine, price_line_item, compute_totals, explain_line_item,
)
from interior_quote.engine.models import LineItem, Room, Project


def test_standard_wardrobe_price(wardrobe, rates):
    """6×7 ft, BWR 120 + laminate 60 + labor 150 = 330/sq ft over 42 sq ft."""
    assert price_line_item(wardrobe, rates) == pytest.approx(13860)


def test_luxury_hardware_multiplies_whole_base(luxury_wardrobe, rates):
    """Labor is folded into the base before the 2.2 multiplier."""
    assert price_line_item(luxury_wardrobe, rates) == pytest.approx(30492)


def test_two_item_room_totals(project):
    totals = compute_totals(project)

    assert totals.subtotal == pytest.approx(44352)
    assert totals.tax == pytest.approx(7983.36)
    assert totals.grand_total == pytest.approx(52335.36)
    assert [rt.id for rt in totals.room_totals] == ['r1']
    assert totals.room_total('r1') == totals.subtotal


@pytest.mark.parametrize("width,height", [(0, 7), (6, 0), (-6, 7), (6, -7), (0, 0)])
def test_non_positive_area_prices_zero(wardrobe, rates, width, height):
    item = LineItem(**{**wardrobe.to_dict(), 'width': width, 'height': height, 'qty': 5})
    assert price_line_item(item, rates) == 0


def test_negative_by_negative_is_positive_area(wardrobe, rates):
    item = LineItem(**{**wardrobe.to_dict(), 'width': -6, 'height': -7})
    assert price_line_item(item, rates) == pytest.approx(13860)


def test_price_is_linear_in_quantity(luxury_wardrobe, rates):
    single = price_line_item(luxury_wardrobe, rates)
    for qty in (2, 3, 7):
        item = LineItem(**{**luxury_wardrobe.to_dict(), 'qty': qty})
        assert price_line_item(item, rates) == pytest.approx(qty * single)


def test_unknown_material_and_finish_price_like_zero_rate(wardrobe, rates):
    unknown = LineItem(**{**wardrobe.to_dict(), 'material': 'Teak', 'finish': 'Gold Leaf'})
    zero_rated = rates.with_material('Teak', 0).with_finish('Gold Leaf', 0)

    assert price_line_item(unknown, rates) == price_line_item(unknown, zero_rated)
    assert price_line_item(unknown, rates) == pytest.approx(150 * 42)


def test_unknown_hardware_prices_like_multiplier_one(wardrobe, rates):
    unknown = LineItem(**{**wardrobe.to_dict(), 'hardware': 'Discontinued'})
    assert price_line_item(unknown, rates) == price_line_item(wardrobe, rates)


def test_depth_is_not_priced(wardrobe, rates):
    deep = LineItem(**{**wardrobe.to_dict(), 'depth': 40})
    assert price_line_item(deep, rates) == price_line_item(wardrobe, rates)


def test_subtotal_is_sum_of_room_totals(rates, wardrobe, luxury_wardrobe):
    project = Project(rates=rates, rooms=[
        Room(id='a', name='Bedroom', items=[wardrobe]),
        Room(id='b', name='Study', items=[luxury_wardrobe, LineItem(**{**wardrobe.to_dict(), 'id': 'w3', 'qty': 2})]),
        Room(id='c', name='Empty'),
    ])
    totals = compute_totals(project)

    assert totals.subtotal == sum(rt.total for rt in totals.room_totals)
    assert [rt.id for rt in totals.room_totals] == ['a', 'b', 'c']
    assert totals.room_total('c') == 0
    assert set(totals.item_totals) == {('a', 'w1'), ('b', 'w2'), ('b', 'w3')}
    assert sum(totals.item_totals.values()) == pytest.approx(totals.subtotal)


def test_tax_is_exact_percentage_of_subtotal(project):
    project.rates = project.rates.with_updates(tax_rate=12.5)
    totals = compute_totals(project)
    assert totals.tax == totals.subtotal * (12.5 / 100)


def test_design_fee_added_to_grand_total(project):
    without_fee = compute_totals(project)
    assert without_fee.grand_total == without_fee.subtotal + without_fee.tax

    project.rates = project.rates.with_updates(design_fee_fixed=25000)
    with_fee = compute_totals(project)
    assert with_fee.grand_total == with_fee.subtotal + with_fee.tax + 25000


def test_empty_project_totals(rates):
    totals = compute_totals(Project(rates=rates.with_updates(design_fee_fixed=5000)))

    assert totals.subtotal == 0
    assert totals.tax == 0
    assert totals.grand_total == 5000
    assert totals.room_totals == ()


def test_compute_totals_does_not_mutate_project(project):
    before = project.to_dict()
    compute_totals(project)
    assert project.to_dict() == before


def test_explain_matches_price(luxury_wardrobe, rates):
    breakdown = explain_line_item(luxury_wardrobe, rates)

    assert breakdown.amount == price_line_item(luxury_wardrobe, rates)
    assert breakdown.area == 42
    assert breakdown.base_rate == 330
    assert breakdown.hardware_multiplier == 2.2
    assert breakdown.warnings == []
    assert "Unit Cost" in breakdown.get_trace_text()


def test_explain_reports_defaulted_lookups(wardrobe, rates):
    item = LineItem(**{**wardrobe.to_dict(), 'material': 'Teak', 'finish': 'Gold', 'hardware': 'Old'})
    breakdown = explain_line_item(item, rates)

    assert len(breakdown.warnings) == 3
    assert breakdown.material_rate == 0
    assert breakdown.finish_rate == 0
    assert breakdown.hardware_multiplier == 1
    assert breakdown.amount == price_line_item(item, rates)


def test_explain_zero_area(wardrobe, rates):
    item = LineItem(**{**wardrobe.to_dict(), 'width': 0})
    breakdown = explain_line_item(item, rates)
    assert breakdown.amount == 0
    assert breakdown.unit_cost == 0


def test_engine_caches_until_project_changes(project):
    engine = PricingEngine()

    first = engine.totals(project)
    assert engine.totals(project) is first
    assert engine.hits == 1

    project.rooms[0].items[0].qty = 2
    second = engine.totals(project)
    assert second is not first
    assert second.subtotal == pytest.approx(13860 * 2 + 30492)


def test_engine_recomputes_when_rates_replaced(project):
    engine = PricingEngine()
    first = engine.totals(project)

    project.rates = project.rates.with_updates(labor_rate_sqft=200)
    second = engine.totals(project)

    assert engine.misses == 2
    assert second.subtotal > first.subtotal


def test_same_item_id_in_two_rooms(rates, wardrobe, luxury_wardrobe):
    """Item ids only need to be unique within a room."""
    project = Project(rates=rates, rooms=[
        Room(id='a', name='Bedroom', items=[LineItem(**{**wardrobe.to_dict(), 'id': 'x'})]),
        Room(id='b', name='Guest', items=[LineItem(**{**luxury_wardrobe.to_dict(), 'id': 'x'})]),
    ])
    totals = compute_totals(project)

    assert totals.item_total('a', 'x') == pytest.approx(13860)
    assert totals.item_total('b', 'x') == pytest.approx(30492)
    assert sum(totals.item_totals.values()) == pytest.approx(totals.subtotal)
    assert totals.item_total('a', 'missing') == 0


def test_cached_totals_are_read_only(project):
    engine = PricingEngine()
    totals = engine.totals(project)

    with pytest.raises(TypeError):
        totals.item_totals[('r1', 'w1')] = 0
    assert engine.totals(project).item_total('r1', 'w1') == pytest.approx(13860)
