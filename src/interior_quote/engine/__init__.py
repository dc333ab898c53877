"""Engine subpackage - rate card, data model and pricing calculation."""
from .models import RateConfiguration, LineItem, Room, Client, Project, Totals, RoomTotal
from .pricing_engine import PricingEngine, price_line_item, compute_totals, explain_line_item
from .rates import DEFAULT_RATES, validate_rates, load_rates, save_rates

__all__ = [
    'RateConfiguration', 'LineItem', 'Room', 'Client', 'Project', 'Totals', 'RoomTotal',
    'PricingEngine', 'price_line_item', 'compute_totals', 'explain_line_item',
    'DEFAULT_RATES', 'validate_rates', 'load_rates', 'save_rates',
]
