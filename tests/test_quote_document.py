import pytest

from interior_quote.engine import compute_totals
from interior_quote.engine.models import Client, LineItem, Project, Room
from interior_quote.services.quote_document import (
    format_currency, quote_dataframe, room_summary_dataframe, quote_summary, render_text, to_csv,
    EXPORT_COLUMNS,
)


@pytest.mark.parametrize("amount,expected", [
    (0, "₹0"),
    (999, "₹999"),
    (1000, "₹1,000"),
    (52335.36, "₹52,335"),
    (123456.5, "₹1,23,457"),
    (12345678, "₹1,23,45,678"),
    (-1500.4, "-₹1,500"),
])
def test_format_currency(amount, expected):
    assert format_currency(amount) == expected


def test_format_currency_symbol():
    assert format_currency(10, symbol='$') == "$10"


def test_quote_dataframe(project):
    df = quote_dataframe(project, compute_totals(project))

    assert list(df.columns) == EXPORT_COLUMNS
    assert len(df) == 2
    assert df['Amount'].sum() == pytest.approx(44352)
    assert df.iloc[0]['Area (sq ft)'] == 42


def test_room_summary_dataframe(project):
    df = room_summary_dataframe(project, compute_totals(project))
    assert df.iloc[0]['Items'] == 2
    assert df.iloc[0]['Total'] == pytest.approx(44352)


def test_summary_rows_skip_zero_design_fee(project):
    totals = compute_totals(project)
    labels = [label for label, _ in quote_summary(totals, project.rates)]
    assert labels == ['Subtotal', 'GST (18%)', 'Grand Total']

    labels = [label for label, _ in quote_summary(totals, project.rates.with_updates(design_fee_fixed=5000))]
    assert 'Design Fee' in labels


def test_render_text(project):
    project.client = Client(name='A. Sharma', carpet_area=1250, quote_date='2026-10-19')
    text = render_text(project, compute_totals(project))

    assert 'A. Sharma' in text
    assert '2026-10-19' in text
    assert 'Master Bedroom' in text
    assert '₹52,335' in text


def test_csv_export(project):
    csv_text = to_csv(project, compute_totals(project))
    assert csv_text.splitlines()[0].startswith('Room,Item,')
    assert len(csv_text.strip().splitlines()) == 3


def test_dataframe_amounts_follow_their_room(rates, wardrobe, luxury_wardrobe):
    project = Project(rates=rates, rooms=[
        Room(id='a', name='Bedroom', items=[LineItem(**{**wardrobe.to_dict(), 'id': 'x'})]),
        Room(id='b', name='Guest', items=[LineItem(**{**luxury_wardrobe.to_dict(), 'id': 'x'})]),
    ])
    totals = compute_totals(project)
    df = quote_dataframe(project, totals)

    assert df['Amount'].tolist() == [pytest.approx(13860), pytest.approx(30492)]
    # room header and item line
    assert render_text(project, totals).count('₹13,860') == 2
