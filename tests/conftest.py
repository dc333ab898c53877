import os
import sys

import pytest

# Add src to path for internal imports
src_path = os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))), 'src')
if src_path not in sys.path:
    sys.path.insert(0, src_path)

from interior_quote.engine.models import RateConfiguration, LineItem, Room, Project


@pytest.fixture
def rates():
    """Rate card matching the worked examples on the printed quotation."""
    return RateConfiguration(
        materials={'BWR Plywood': 120, 'MDF': 70},
        finishes={'Laminate (1mm)': 60, 'Acrylic': 180},
        hardware_multipliers={'Standard': 1.0, 'Luxury (Blum)': 2.2},
        labor_rate_sqft=150,
        tax_rate=18,
        design_fee_fixed=0,
    )


@pytest.fixture
def wardrobe():
    return LineItem(
        id='w1', name='Wardrobe', width=6, height=7, depth=2,
        material='BWR Plywood', finish='Laminate (1mm)', hardware='Standard', qty=1,
    )


@pytest.fixture
def luxury_wardrobe(wardrobe):
    return LineItem(**{**wardrobe.to_dict(), 'id': 'w2', 'hardware': 'Luxury (Blum)'})


@pytest.fixture
def project(rates, wardrobe, luxury_wardrobe):
    return Project(rooms=[Room(id='r1', name='Master Bedroom', room_type='bedroom',
                               items=[wardrobe, luxury_wardrobe])], rates=rates)
