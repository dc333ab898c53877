"""
Interior Quote Builder Package

Prices interior-design quotations: rooms of joinery line items priced
against an editable rate card, rolled up into room, sub and grand totals.
"""

__version__ = "1.0.0"
