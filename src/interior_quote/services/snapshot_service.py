"""
Snapshot Service - saves immutable copies of quotations per user.

A snapshot captures the client, rooms, the rate card in effect and the
computed totals at save time, so later rate card edits never change a
saved quotation. Failures are reported as an "error" status and are not
retried; the in-memory project is never modified.
"""
import json
import logging
import re
import uuid
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Optional

from ..engine.models import Project, Totals
from ..errors import NotFoundError

logger = logging.getLogger(__name__)

STATUS_SAVED = "saved"
STATUS_ERROR = "error"

_SAFE_ID = re.compile(r'^(?!\.+$)[A-Za-z0-9_.@-]+$')


@dataclass
class SaveResult:
    """Outcome of a snapshot save."""
    status: str
    snapshot_id: Optional[str] = None
    path: Optional[Path] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.status == STATUS_SAVED


def to_snapshot(project: Project, totals: Totals, status: str = STATUS_SAVED) -> dict:
    """Build the serializable snapshot payload for a project and its totals."""
    data = project.to_dict()
    return {
        'client': data['client'],
        'rooms': data['rooms'],
        'rates': data['rates'],
        'totals': totals.to_dict(),
        'status': status,
    }


class SnapshotStore:
    """File-backed snapshot store keyed by user identity."""

    def __init__(self, directory: Path):
        self.directory = Path(directory)

    def _user_dir(self, user_id: str) -> Path:
        return self.directory / user_id

    def save(self, user_id: Optional[str], project: Project, totals: Totals) -> SaveResult:
        """Persist a snapshot; never raises for storage failures."""
        if not user_id or not str(user_id).strip():
            logger.error("Snapshot save rejected: no authenticated user")
            return SaveResult(status=STATUS_ERROR, error="Not authenticated")
        user_id = str(user_id).strip()
        if not _SAFE_ID.match(user_id):
            logger.error("Snapshot save rejected: invalid user id %r", user_id)
            return SaveResult(status=STATUS_ERROR, error=f"Invalid user id '{user_id}'")

        snapshot_id = f"{datetime.now().strftime('%Y%m%d%H%M%S')}-{uuid.uuid4().hex[:6]}"
        payload = to_snapshot(project, totals)
        payload['snapshot_id'] = snapshot_id
        payload['user_id'] = user_id
        payload['saved_at'] = datetime.now().isoformat(timespec='seconds')

        path = self._user_dir(user_id) / f"{snapshot_id}.json"
        try:
            text = json.dumps(payload, ensure_ascii=False, indent=2)
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(text, encoding='utf-8')
        except (OSError, TypeError, ValueError) as e:
            logger.error("Error saving snapshot for %s: %s", user_id, e)
            return SaveResult(status=STATUS_ERROR, error=str(e))

        logger.info("Snapshot %s saved for %s", snapshot_id, user_id)
        return SaveResult(status=STATUS_SAVED, snapshot_id=snapshot_id, path=path)

    def list_snapshots(self, user_id: str) -> list[dict]:
        """List a user's snapshots, newest first, as summary dicts."""
        if not _SAFE_ID.match(user_id or ''):
            return []
        user_dir = self._user_dir(user_id)
        if not user_dir.exists():
            return []

        summaries = []
        for path in sorted(user_dir.glob('*.json'), reverse=True):
            with open(path, 'r', encoding='utf-8') as f:
                data = json.load(f)
            summaries.append({
                'snapshot_id': data.get('snapshot_id', path.stem),
                'client': data.get('client', {}).get('name', ''),
                'saved_at': data.get('saved_at'),
                'grand_total': data.get('totals', {}).get('grandTotal', 0.0),
            })
        return summaries

    def load(self, user_id: str, snapshot_id: str) -> dict:
        """Load a snapshot payload exactly as saved."""
        if not _SAFE_ID.match(user_id or '') or not _SAFE_ID.match(snapshot_id or ''):
            raise NotFoundError(f"Snapshot '{snapshot_id}' not found")
        path = self._user_dir(user_id) / f"{snapshot_id}.json"
        if not path.exists():
            raise NotFoundError(f"Snapshot '{snapshot_id}' not found")
        with open(path, 'r', encoding='utf-8') as f:
            return json.load(f)

    def load_project(self, user_id: str, snapshot_id: str) -> Project:
        """Rebuild an editable Project from a snapshot, with its saved rates."""
        return Project.from_dict(self.load(user_id, snapshot_id))
