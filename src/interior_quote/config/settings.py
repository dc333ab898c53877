"""
Centralized settings, path configuration and logging setup for the quote builder.
"""
import logging
import os
from pathlib import Path
from dataclasses import dataclass
from typing import Optional


def get_project_root() -> Path:
    """Get the project root directory (where pyproject.toml lives)."""
    current = Path(__file__).resolve()
    for parent in current.parents:
        if (parent / 'pyproject.toml').exists():
            return parent
    # Fallback to 3 levels up from this file
    return Path(__file__).resolve().parent.parent.parent.parent


@dataclass
class Settings:
    """Application settings with sensible defaults."""

    project_root: Path

    # Saved rate card; built-in defaults are used while it does not exist
    rate_card: Path

    # Snapshots are stored as <snapshot_dir>/<user_id>/<snapshot_id>.json
    snapshot_dir: Path

    currency_symbol: str = '₹'
    log_level: str = 'INFO'

    # Bind address for scripts/run_api.py
    api_host: str = '127.0.0.1'
    api_port: int = 8000

    @classmethod
    def load(cls, project_root: Optional[Path] = None) -> 'Settings':
        """Load settings from the project structure and environment overrides."""
        root = project_root or get_project_root()
        data_dir = root / 'data'

        rate_card = os.environ.get('INTERIOR_QUOTE_RATES')
        snapshot_dir = os.environ.get('INTERIOR_QUOTE_SNAPSHOTS')

        return cls(
            project_root=root,
            rate_card=Path(rate_card) if rate_card else data_dir / 'rate_card.json',
            snapshot_dir=Path(snapshot_dir) if snapshot_dir else data_dir / 'snapshots',
            currency_symbol=os.environ.get('INTERIOR_QUOTE_CURRENCY', '₹'),
            log_level=os.environ.get('INTERIOR_QUOTE_LOG_LEVEL', 'INFO').upper(),
            api_host=os.environ.get('INTERIOR_QUOTE_API_HOST', '127.0.0.1'),
            api_port=int(os.environ.get('INTERIOR_QUOTE_API_PORT', '8000')),
        )


# Default settings instance
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Get the global settings instance."""
    global _settings
    if _settings is None:
        _settings = Settings.load()
    return _settings


def configure_logging(level: str = 'INFO'):
    """Install a root handler once; later calls only adjust the level."""
    root = logging.getLogger()
    if not root.handlers:
        logging.basicConfig(
            level=level,
            format='%(asctime)s %(levelname)s [%(name)s] %(message)s',
        )
    root.setLevel(level)
