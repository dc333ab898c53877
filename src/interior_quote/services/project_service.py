"""
Project Service - room and line item CRUD over a quotation in progress.

Form values are coerced here, at the point of entry, so the pricing
engine only ever sees numeric dimensions and positive integer quantities.
"""
import logging
from typing import Optional

from ..engine.models import Project, Room, LineItem, Client, RateConfiguration
from ..engine.entry import new_id, coerce_dimension, coerce_quantity
from ..engine.rates import DEFAULT_RATES
from ..errors import InvalidEntryError, NotFoundError
from .templates import get_item_template, get_room_template

logger = logging.getLogger(__name__)


_ITEM_FIELDS = ('name', 'width', 'height', 'depth', 'material', 'finish', 'hardware', 'qty')
_CLIENT_FIELDS = ('name', 'contact', 'address', 'property_type', 'carpet_area', 'email', 'quote_date')


def _clean_item_fields(changes: dict) -> dict:
    cleaned = {}
    for key, value in changes.items():
        if key not in _ITEM_FIELDS:
            raise InvalidEntryError(key, value, "is not a line item field")
        if key in ('width', 'height', 'depth'):
            cleaned[key] = coerce_dimension(value, key)
        elif key == 'qty':
            cleaned[key] = coerce_quantity(value)
        else:
            cleaned[key] = '' if value is None else str(value).strip()
    return cleaned


class ProjectService:
    """Service for building a quotation incrementally."""

    def __init__(self, project: Optional[Project] = None, rates: Optional[RateConfiguration] = None):
        if project is None:
            project = Project(rates=rates if rates is not None else DEFAULT_RATES)
        self.project = project

    # ------------------------------------------------------------------
    # Client and rates
    # ------------------------------------------------------------------

    def update_client(self, **fields) -> Client:
        """Update client details. carpet_area is coerced like a dimension."""
        client = self.project.client
        for key, value in fields.items():
            if key not in _CLIENT_FIELDS:
                raise InvalidEntryError(key, value, "is not a client field")
            if key == 'carpet_area':
                value = coerce_dimension(value, key)
                if value < 0:
                    raise InvalidEntryError(key, value, "must not be negative")
            setattr(client, key, value)
        return client

    def set_rates(self, rates: RateConfiguration) -> RateConfiguration:
        """Replace the rate card in effect for this project."""
        self.project.rates = rates
        logger.info("Project rate card replaced")
        return rates

    # ------------------------------------------------------------------
    # Rooms
    # ------------------------------------------------------------------

    def get_room(self, room_id: str) -> Room:
        room = self.project.get_room(room_id)
        if room is None:
            raise NotFoundError(f"Room '{room_id}' not found")
        return room

    def add_room(self, name: str = '', room_type: str = 'custom', template: Optional[str] = None) -> Room:
        """
        Add a room, optionally seeded from a room template.

        A template provides the room type and its starter items; an
        explicit name still wins over the template name.
        """
        items = []
        if template:
            room_template = get_room_template(template)
            room_type = room_template.room_type
            name = name or room_template.name
            for key in room_template.item_keys:
                items.append(self._item_from_template(key))

        room = Room(id=new_id(), name=(name or 'Room').strip(), room_type=room_type, items=items)
        self.project.rooms.append(room)
        logger.debug("Added room %s (%s) with %d items", room.id, room.name, len(items))
        return room

    def rename_room(self, room_id: str, name: str) -> Room:
        room = self.get_room(room_id)
        room.name = name.strip()
        return room

    def remove_room(self, room_id: str) -> Room:
        room = self.get_room(room_id)
        self.project.rooms.remove(room)
        logger.debug("Removed room %s", room_id)
        return room

    # ------------------------------------------------------------------
    # Line items
    # ------------------------------------------------------------------

    def get_item(self, room_id: str, item_id: str) -> LineItem:
        item = self.get_room(room_id).get_item(item_id)
        if item is None:
            raise NotFoundError(f"Item '{item_id}' not found in room '{room_id}'")
        return item

    def add_item(self, room_id: str, **fields) -> LineItem:
        """Add a line item to a room; fields are validated like form input."""
        room = self.get_room(room_id)
        cleaned = _clean_item_fields(fields)
        item = LineItem(id=new_id(), **{'name': 'Item', **cleaned})
        room.items.append(item)
        return item

    def add_item_from_template(self, room_id: str, template_key: str) -> LineItem:
        room = self.get_room(room_id)
        item = self._item_from_template(template_key)
        room.items.append(item)
        return item

    def update_item(self, room_id: str, item_id: str, **changes) -> LineItem:
        """Apply validated changes; a rejected field leaves the item untouched."""
        item = self.get_item(room_id, item_id)
        cleaned = _clean_item_fields(changes)
        for key, value in cleaned.items():
            setattr(item, key, value)
        return item

    def remove_item(self, room_id: str, item_id: str) -> LineItem:
        room = self.get_room(room_id)
        item = self.get_item(room_id, item_id)
        room.items.remove(item)
        return item

    def duplicate_item(self, room_id: str, item_id: str) -> LineItem:
        """Copy an item and insert the copy right after the original."""
        room = self.get_room(room_id)
        original = self.get_item(room_id, item_id)
        copy = LineItem.from_dict({**original.to_dict(), 'id': new_id()})
        room.items.insert(room.items.index(original) + 1, copy)
        return copy

    def move_item(self, room_id: str, item_id: str, position: int) -> LineItem:
        """Move an item to a new display position within its room (clamped)."""
        room = self.get_room(room_id)
        item = self.get_item(room_id, item_id)
        room.items.remove(item)
        position = max(0, min(position, len(room.items)))
        room.items.insert(position, item)
        return item

    def _item_from_template(self, key: str) -> LineItem:
        template = get_item_template(key)
        return LineItem(
            id=new_id(),
            name=template.name,
            width=float(template.width),
            height=float(template.height),
            depth=float(template.depth),
            material=template.material,
            finish=template.finish,
            hardware=template.hardware,
        )
