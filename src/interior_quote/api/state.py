"""
Shared API state: settings, the live rate card, engine and snapshot store.
"""
import logging
from pathlib import Path
from typing import Optional

from ..config.settings import get_settings, configure_logging
from ..engine.models import RateConfiguration
from ..engine.pricing_engine import PricingEngine
from ..engine.rates import load_rates, save_rates
from ..services.snapshot_service import SnapshotStore

logger = logging.getLogger(__name__)


class RateCardHolder:
    """
    Holds the current rate card value.

    Edits replace the value wholesale; a pricing call that already read
    the previous card keeps using it.
    """

    def __init__(self, path: Optional[Path]):
        self.path = path
        self.rates = load_rates(path)

    def get(self) -> RateConfiguration:
        return self.rates

    def replace(self, rates: RateConfiguration, persist: bool = True) -> RateConfiguration:
        self.rates = rates
        if persist and self.path is not None:
            save_rates(rates, self.path)
        return rates


settings = get_settings()
configure_logging(settings.log_level)

rate_card = RateCardHolder(settings.rate_card)
engine = PricingEngine()
snapshot_store = SnapshotStore(settings.snapshot_dir)
