#!/usr/bin/env python
"""
Run the Streamlit quote builder.

Usage:
    python scripts/run_app.py

The UI reads the same rate card and snapshot directory as the API, so
INTERIOR_QUOTE_RATES and INTERIOR_QUOTE_SNAPSHOTS apply to both.
"""
import subprocess
import sys
from pathlib import Path

project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root / 'src'))

from interior_quote.config.settings import get_settings


def main():
    settings = get_settings()
    ui_path = project_root / 'src' / 'interior_quote' / 'ui' / 'app_streamlit.py'

    settings.snapshot_dir.mkdir(parents=True, exist_ok=True)
    print(f"Rate card:  {settings.rate_card}")
    print(f"Snapshots:  {settings.snapshot_dir}")

    cmd = [sys.executable, '-m', 'streamlit', 'run', str(ui_path)]
    try:
        subprocess.run(cmd, cwd=str(project_root))
    except KeyboardInterrupt:
        print("\nApplication stopped.")


if __name__ == "__main__":
    main()
