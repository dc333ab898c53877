"""
Rates API - FastAPI router for the rate card.
"""
from typing import Any

from fastapi import APIRouter, HTTPException

from ..engine.models import RateConfiguration
from ..engine.rates import DEFAULT_RATES, normalize_rate_keys, validate_rates
from ..errors import RateConfigurationError
from . import state
from .schemas import ValidationResponse

router = APIRouter(prefix="/rates", tags=["rates"])


@router.get("")
async def get_rates():
    """Current rate card."""
    return state.rate_card.get().to_dict()


@router.get("/defaults")
async def get_default_rates():
    """Built-in fallback rate card."""
    return DEFAULT_RATES.to_dict()


@router.put("")
async def replace_rates(rates: dict[str, Any]):
    """Replace the rate card. Saved quotations keep the rates they were saved with."""
    try:
        new_rates = RateConfiguration.from_dict(rates)
    except RateConfigurationError as e:
        raise HTTPException(status_code=400, detail={"errors": e.errors})
    return state.rate_card.replace(new_rates).to_dict()


@router.post("/reset")
async def reset_rates():
    """Restore the built-in rate card."""
    return state.rate_card.replace(DEFAULT_RATES).to_dict()


@router.post("/validate", response_model=ValidationResponse)
async def validate(rates: dict[str, Any]):
    """Validate a rate card without saving."""
    result = validate_rates(normalize_rate_keys(rates))
    return ValidationResponse(valid=result.valid, errors=result.errors, warnings=result.warnings)
