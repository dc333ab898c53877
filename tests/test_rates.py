import json
import math

import pytest

from interior_quote.engine.models import RateConfiguration
from interior_quote.engine.rates import (
    DEFAULT_RATES, validate_rates, normalize_rate_keys, load_rates, save_rates,
)
from interior_quote.errors import RateConfigurationError


def test_default_rate_card_is_valid():
    result = validate_rates(normalize_rate_keys(DEFAULT_RATES.to_dict()))
    assert result.valid, result.errors
    assert DEFAULT_RATES.material_rate('BWR Plywood') == 120
    assert DEFAULT_RATES.hardware_multiplier('Luxury (Blum)') == 2.2


def test_lookup_defaults(rates):
    assert rates.material_rate('Unobtainium') == 0
    assert rates.finish_rate('Unobtainium') == 0
    assert rates.hardware_multiplier('Unobtainium') == 1


@pytest.mark.parametrize("bad", [-1, math.inf, math.nan, "120", None, True])
def test_invalid_material_rate_rejected(bad):
    result = validate_rates({'materials': {'MDF': bad}})
    assert not result.valid
    assert "materials['MDF']" in result.errors[0]


def test_tax_rate_above_hundred_rejected():
    result = validate_rates({'tax_rate': 101})
    assert not result.valid
    assert any('between 0 and 100' in e for e in result.errors)


def test_negative_design_fee_and_multiplier_rejected():
    result = validate_rates({'design_fee_fixed': -5, 'hardware_multipliers': {'Basic': -0.5}})
    assert len(result.errors) == 2


def test_empty_tables_warn_but_pass():
    result = validate_rates({})
    assert result.valid
    assert len(result.warnings) == 2


def test_from_dict_accepts_stored_and_field_names():
    stored = RateConfiguration.from_dict({
        'materials': {'MDF': 70}, 'hardwareMultipliers': {'Standard': 1},
        'laborRateSqFt': 150, 'taxRate': 18, 'designFeeFixed': 1000,
    })
    fields = RateConfiguration.from_dict({
        'materials': {'MDF': 70}, 'hardware_multipliers': {'Standard': 1},
        'labor_rate_sqft': 150, 'tax_rate': 18, 'design_fee_fixed': 1000,
    })
    assert stored == fields
    assert stored.design_fee_fixed == 1000.0


def test_from_dict_raises_with_all_errors():
    with pytest.raises(RateConfigurationError) as exc_info:
        RateConfiguration.from_dict({'taxRate': 150, 'laborRateSqFt': -1})
    assert len(exc_info.value.errors) == 2


def test_edits_produce_new_value(rates):
    edited = rates.with_material('Teak', 400).without_finish('Acrylic').with_updates(tax_rate=5)

    assert 'Teak' not in rates.materials
    assert 'Acrylic' in rates.finishes
    assert rates.tax_rate == 18
    assert edited.material_rate('Teak') == 400
    assert edited.finish_rate('Acrylic') == 0
    assert edited.tax_rate == 5

    tiers = rates.with_hardware('Basic', 0.9).without_hardware('Luxury (Blum)').without_material('MDF')
    assert tiers.hardware_multiplier('Basic') == 0.9
    assert tiers.hardware_multiplier('Luxury (Blum)') == 1
    assert tiers.material_rate('MDF') == 0
    assert 'Basic' not in rates.hardware_multipliers
    assert rates.hardware_multiplier('Luxury (Blum)') == 2.2
    assert rates.material_rate('MDF') == 70


def test_rate_tables_are_read_only(rates):
    with pytest.raises(TypeError):
        rates.materials['MDF'] = 1
    with pytest.raises(Exception):
        rates.tax_rate = 0


def test_source_dict_changes_do_not_leak_in():
    materials = {'MDF': 70}
    rates = RateConfiguration(materials=materials)
    materials['MDF'] = 1
    assert rates.material_rate('MDF') == 70


def test_load_missing_file_uses_defaults(tmp_path):
    assert load_rates(tmp_path / 'missing.json') is DEFAULT_RATES
    assert load_rates(None) is DEFAULT_RATES


def test_save_then_load(tmp_path, rates):
    path = save_rates(rates, tmp_path / 'nested' / 'rates.json')
    assert json.loads(path.read_text(encoding='utf-8'))['laborRateSqFt'] == 150
    assert load_rates(path) == rates


def test_load_invalid_file_raises(tmp_path):
    path = tmp_path / 'rates.json'
    path.write_text(json.dumps({'taxRate': -3}), encoding='utf-8')
    with pytest.raises(RateConfigurationError):
        load_rates(path)


@pytest.mark.parametrize("edit", [
    lambda r: r.with_material('X', -1),
    lambda r: r.with_finish('Acrylic', math.inf),
    lambda r: r.with_hardware('Standard', math.nan),
    lambda r: r.with_updates(tax_rate=150),
    lambda r: r.with_updates(design_fee_fixed=-1),
])
def test_invalid_edit_raises(rates, edit):
    with pytest.raises(RateConfigurationError):
        edit(rates)


def test_constructor_validates():
    with pytest.raises(RateConfigurationError):
        RateConfiguration(labor_rate_sqft=math.nan)
    with pytest.raises(RateConfigurationError) as exc_info:
        RateConfiguration(materials={'BWR Plywood': -1000})
    assert "materials['BWR Plywood']" in exc_info.value.errors[0]


def test_integer_rates_stored_as_floats(rates):
    assert isinstance(rates.labor_rate_sqft, float)
    assert isinstance(rates.materials['MDF'], float)
    assert RateConfiguration.from_dict(rates.to_dict()) == rates
