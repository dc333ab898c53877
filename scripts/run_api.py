#!/usr/bin/env python
"""
Run the quote builder HTTP API under uvicorn.

Usage:
    python scripts/run_api.py [--no-reload]

Bind address comes from INTERIOR_QUOTE_API_HOST / INTERIOR_QUOTE_API_PORT
(default 127.0.0.1:8000).
"""
import os
import subprocess
import sys
from pathlib import Path

project_root = Path(__file__).parent.parent
src_path = project_root / 'src'
sys.path.insert(0, str(src_path))

from interior_quote.config.settings import get_settings


def main():
    settings = get_settings()

    env = os.environ.copy()
    env["PYTHONPATH"] = os.pathsep.join(filter(None, [str(src_path), env.get("PYTHONPATH")]))

    cmd = [
        sys.executable, "-m", "uvicorn", "interior_quote.api.main:app",
        "--host", settings.api_host,
        "--port", str(settings.api_port),
    ]
    if '--no-reload' not in sys.argv[1:]:
        cmd.append("--reload")

    print(f"Rate card:  {settings.rate_card}"
          f"{'' if settings.rate_card.exists() else ' (missing, using built-in defaults)'}")
    print(f"Snapshots:  {settings.snapshot_dir}")
    print(f"Serving API on http://{settings.api_host}:{settings.api_port}")
    try:
        subprocess.run(cmd, cwd=str(project_root), env=env)
    except KeyboardInterrupt:
        print("\nAPI stopped.")


if __name__ == "__main__":
    main()
