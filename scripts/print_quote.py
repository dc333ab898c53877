#!/usr/bin/env python
"""
Print a saved snapshot (or a project JSON file) as a text quotation.

Usage:
    python scripts/print_quote.py <file.json> [--csv]

Snapshots are re-priced with the rates they were saved with; the stored
totals are shown alongside so any drift is visible.
"""
import json
import sys
from pathlib import Path

# Add src to path
src_path = Path(__file__).parent.parent / 'src'
sys.path.insert(0, str(src_path))

from interior_quote.engine import Project, compute_totals
from interior_quote.errors import QuoteBuilderError
from interior_quote.services.quote_document import render_text, to_csv, format_currency


def main():
    if len(sys.argv) < 2:
        print(__doc__)
        sys.exit(1)

    path = Path(sys.argv[1])
    data = json.loads(path.read_text(encoding='utf-8'))
    try:
        project = Project.from_dict(data)
    except QuoteBuilderError as e:
        print(f"ERROR: {path}: {e}")
        sys.exit(1)
    totals = compute_totals(project)

    if '--csv' in sys.argv[2:]:
        print(to_csv(project, totals))
        return

    print(render_text(project, totals))

    stored = data.get('totals')
    if stored:
        print()
        print(f"Stored grand total:   {format_currency(stored.get('grandTotal', 0.0))}")
        print(f"Re-priced total:      {format_currency(totals.grand_total)}")


if __name__ == "__main__":
    main()
