"""
Quote Document - display formatting and exports for a priced quotation.

Amounts are rounded to whole currency units here and only here; the
engine's numbers are never rounded in place.
"""
import math
from datetime import date

import pandas as pd

from ..engine.models import Project, RateConfiguration, Totals

EXPORT_COLUMNS = [
    'Room', 'Item', 'Width (ft)', 'Height (ft)', 'Depth (ft)', 'Area (sq ft)',
    'Material', 'Finish', 'Hardware', 'Qty', 'Amount',
]


def _group_indian(digits: str) -> str:
    """Group an integer digit string as 12,34,56,789."""
    if len(digits) <= 3:
        return digits
    head, tail = digits[:-3], digits[-3:]
    groups = []
    while len(head) > 2:
        groups.insert(0, head[-2:])
        head = head[:-2]
    if head:
        groups.insert(0, head)
    return ",".join(groups) + "," + tail


def format_currency(amount: float, symbol: str = '₹') -> str:
    """Format an amount as whole currency units, e.g. ₹1,23,457."""
    rounded = math.floor(abs(amount) + 0.5)
    sign = '-' if amount < 0 and rounded else ''
    return f"{sign}{symbol}{_group_indian(str(rounded))}"


def quote_dataframe(project: Project, totals: Totals) -> pd.DataFrame:
    """One row per line item, in room then display order."""
    rows = []
    for room in project.rooms:
        for item in room.items:
            rows.append({
                'Room': room.name,
                'Item': item.name,
                'Width (ft)': item.width,
                'Height (ft)': item.height,
                'Depth (ft)': item.depth,
                'Area (sq ft)': item.area,
                'Material': item.material,
                'Finish': item.finish,
                'Hardware': item.hardware,
                'Qty': item.qty,
                'Amount': totals.item_total(room.id, item.id),
            })
    return pd.DataFrame(rows, columns=EXPORT_COLUMNS)


def room_summary_dataframe(project: Project, totals: Totals) -> pd.DataFrame:
    """Room name, item count and total per room."""
    return pd.DataFrame(
        [
            {'Room': room.name, 'Items': len(room.items), 'Total': totals.room_total(room.id)}
            for room in project.rooms
        ],
        columns=['Room', 'Items', 'Total'],
    )


def quote_summary(totals: Totals, rates: RateConfiguration, symbol: str = '₹') -> list[tuple[str, str]]:
    """Ordered (label, formatted value) rows for the totals block."""
    rows = [('Subtotal', format_currency(totals.subtotal, symbol))]
    rows.append((f"GST ({rates.tax_rate:g}%)", format_currency(totals.tax, symbol)))
    if rates.design_fee_fixed:
        rows.append(('Design Fee', format_currency(rates.design_fee_fixed, symbol)))
    rows.append(('Grand Total', format_currency(totals.grand_total, symbol)))
    return rows


def to_csv(project: Project, totals: Totals) -> str:
    """CSV export of the line items."""
    return quote_dataframe(project, totals).to_csv(index=False)


def render_text(project: Project, totals: Totals, symbol: str = '₹') -> str:
    """Plain-text printable quotation."""
    client = project.client
    lines = ["INTERIOR DESIGN QUOTATION", "=" * 60]
    lines.append(f"Date:          {client.quote_date or date.today().isoformat()}")
    if client.name:
        lines.append(f"Client:        {client.name}")
    if client.contact:
        lines.append(f"Contact:       {client.contact}")
    if client.address:
        lines.append(f"Address:       {client.address}")
    if client.property_type:
        lines.append(f"Property:      {client.property_type}")
    if client.carpet_area:
        lines.append(f"Carpet Area:   {client.carpet_area:g} sq ft")
    lines.append("")

    for room in project.rooms:
        lines.append(f"{room.name}  ({format_currency(totals.room_total(room.id), symbol)})")
        lines.append("-" * 60)
        for item in room.items:
            dims = f"{item.width:g}' × {item.height:g}' × {item.depth:g}'"
            lines.append(f"  {item.name:<24}{dims:<20}x{item.qty:<3}"
                         f"{format_currency(totals.item_total(room.id, item.id), symbol):>12}")
            lines.append(f"    {item.material} / {item.finish} / {item.hardware}")
        lines.append("")

    for label, value in quote_summary(totals, project.rates, symbol):
        lines.append(f"{label:<20}{value:>40}")

    return "\n".join(lines)
