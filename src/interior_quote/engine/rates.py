"""
Rate card defaults, validation and JSON storage.

The built-in DEFAULT_RATES card is the fallback whenever no rate card
file has been saved yet.
"""
import json
import logging
import math
import numbers
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from .models import RateConfiguration

logger = logging.getLogger(__name__)


# Stored (camelCase) key → field name
_KEY_ALIASES = {
    'hardwareMultipliers': 'hardware_multipliers',
    'laborRateSqFt': 'labor_rate_sqft',
    'taxRate': 'tax_rate',
    'designFeeFixed': 'design_fee_fixed',
}

_TABLES = ('materials', 'finishes', 'hardware_multipliers')
_SCALARS = ('labor_rate_sqft', 'tax_rate', 'design_fee_fixed')


@dataclass
class ValidationResult:
    """Result of rate card validation."""
    valid: bool
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    def add_error(self, error: str):
        self.errors.append(error)
        self.valid = False


def normalize_rate_keys(data: dict) -> dict:
    """Map stored camelCase keys onto field names; unknown keys are dropped."""
    normalized = {}
    for key, value in (data or {}).items():
        name = _KEY_ALIASES.get(key, key)
        if name in _TABLES or name in _SCALARS:
            normalized[name] = value
    return normalized


def _is_non_negative_number(value) -> bool:
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        return False
    return math.isfinite(value) and value >= 0


def validate_rates(data: dict) -> ValidationResult:
    """
    Validate a rate card given as a dict of field names.

    All rates and multipliers must be finite, non-negative numbers and the
    tax rate a percentage between 0 and 100. Missing scalars default to 0.
    """
    result = ValidationResult(valid=True)

    for table in _TABLES:
        entries = data.get(table, {})
        if not isinstance(entries, Mapping):
            result.add_error(f"{table} must be a mapping of name to number")
            continue
        for name, value in entries.items():
            if not str(name).strip():
                result.add_error(f"{table} contains an empty name")
            if not _is_non_negative_number(value):
                result.add_error(f"{table}['{name}'] must be a non-negative number, got {value!r}")

    for scalar in _SCALARS:
        value = data.get(scalar, 0.0)
        if not _is_non_negative_number(value):
            result.add_error(f"{scalar} must be a non-negative number, got {value!r}")

    tax_rate = data.get('tax_rate', 0.0)
    if _is_non_negative_number(tax_rate) and tax_rate > 100:
        result.add_error(f"tax_rate must be between 0 and 100, got {tax_rate!r}")

    if isinstance(data.get('materials', {}), Mapping) and not data.get('materials'):
        result.warnings.append("No materials defined - every item prices its material at 0")
    if isinstance(data.get('hardware_multipliers', {}), Mapping) and not data.get('hardware_multipliers'):
        result.warnings.append("No hardware tiers defined - every item uses a multiplier of 1")

    return result


# Built after validate_rates: constructing a RateConfiguration validates it
DEFAULT_RATES = RateConfiguration(
    materials={
        'BWR Plywood': 120.0,
        'MR Plywood': 90.0,
        'HDHMR': 110.0,
        'MDF': 70.0,
        'Particle Board': 55.0,
        'Marine Plywood': 160.0,
    },
    finishes={
        'Laminate (1mm)': 60.0,
        'Acrylic': 180.0,
        'PU Paint': 250.0,
        'Veneer': 220.0,
        'Membrane': 140.0,
        'None': 0.0,
    },
    hardware_multipliers={
        'Basic': 0.9,
        'Standard': 1.0,
        'Premium (Hettich)': 1.5,
        'Luxury (Blum)': 2.2,
    },
    labor_rate_sqft=150.0,
    tax_rate=18.0,
    design_fee_fixed=0.0,
)


def load_rates(path: Optional[Path]) -> RateConfiguration:
    """
    Load a rate card from JSON, falling back to DEFAULT_RATES if the file is absent.

    A file that exists but fails validation raises RateConfigurationError.
    """
    if path is None or not path.exists():
        logger.info("No rate card at %s, using built-in defaults", path)
        return DEFAULT_RATES

    with open(path, 'r', encoding='utf-8') as f:
        data = json.load(f)

    rates = RateConfiguration.from_dict(data)
    logger.info(
        "Loaded rate card from %s (%d materials, %d finishes, %d hardware tiers)",
        path, len(rates.materials), len(rates.finishes), len(rates.hardware_multipliers),
    )
    return rates


def save_rates(rates: RateConfiguration, path: Path) -> Path:
    """Write a rate card to JSON, creating parent directories."""
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, 'w', encoding='utf-8') as f:
        json.dump(rates.to_dict(), f, indent=2, ensure_ascii=False)
    logger.info("Saved rate card to %s", path)
    return path
