"""
Room and item template catalogs used to seed new rooms and line items.

Template dimensions are in feet; materials, finishes and hardware tiers
name entries of the default rate card.
"""
from dataclasses import dataclass, asdict

from ..errors import NotFoundError


@dataclass(frozen=True)
class ItemTemplate:
    """Defaults for a new line item."""
    key: str
    name: str
    width: float
    height: float
    depth: float
    material: str = 'BWR Plywood'
    finish: str = 'Laminate (1mm)'
    hardware: str = 'Standard'

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class RoomTemplate:
    """Defaults for a new room: a type tag, an icon and starter items."""
    key: str
    name: str
    room_type: str
    icon: str
    item_keys: tuple[str, ...] = ()

    def to_dict(self) -> dict:
        data = asdict(self)
        data['item_keys'] = list(self.item_keys)
        return data


ITEM_TEMPLATES: dict[str, ItemTemplate] = {t.key: t for t in [
    ItemTemplate('wardrobe', 'Wardrobe', 6, 7, 2),
    ItemTemplate('loft', 'Loft Storage', 6, 2, 2),
    ItemTemplate('base_unit', 'Kitchen Base Unit', 10, 2.75, 2),
    ItemTemplate('wall_unit', 'Kitchen Wall Unit', 10, 2.5, 1.25, finish='Acrylic'),
    ItemTemplate('tall_unit', 'Tall Pantry Unit', 2, 7, 2),
    ItemTemplate('tv_unit', 'TV Unit', 8, 5, 1.25, material='HDHMR'),
    ItemTemplate('shoe_rack', 'Shoe Rack', 3, 3.5, 1.25, material='MR Plywood'),
    ItemTemplate('crockery_unit', 'Crockery Unit', 4, 7, 1.5, finish='Veneer'),
    ItemTemplate('study_table', 'Study Table', 4, 2.5, 2),
    ItemTemplate('bookshelf', 'Bookshelf', 3, 6, 1, material='MR Plywood'),
    ItemTemplate('bed_back_panel', 'Bed Back Panel', 7, 4, 0.25, material='MDF', finish='Veneer'),
    ItemTemplate('vanity', 'Vanity Unit', 3, 2.5, 1.75, material='Marine Plywood', finish='Acrylic'),
    ItemTemplate('pooja_unit', 'Pooja Unit', 3, 5, 1.5, finish='PU Paint'),
]}


ROOM_TEMPLATES: dict[str, RoomTemplate] = {t.key: t for t in [
    RoomTemplate('kitchen', 'Kitchen', 'kitchen', '🍳', ('base_unit', 'wall_unit', 'tall_unit')),
    RoomTemplate('master_bedroom', 'Master Bedroom', 'bedroom', '🛏️', ('wardrobe', 'loft', 'bed_back_panel')),
    RoomTemplate('bedroom', 'Bedroom', 'bedroom', '🛏️', ('wardrobe', 'loft')),
    RoomTemplate('living_room', 'Living Room', 'living', '🛋️', ('tv_unit', 'shoe_rack')),
    RoomTemplate('dining', 'Dining', 'dining', '🍽️', ('crockery_unit',)),
    RoomTemplate('study', 'Study', 'study', '📚', ('study_table', 'bookshelf')),
    RoomTemplate('pooja', 'Pooja Room', 'pooja', '🪔', ('pooja_unit',)),
    RoomTemplate('foyer', 'Foyer', 'foyer', '🚪', ('shoe_rack',)),
    RoomTemplate('bathroom', 'Bathroom', 'bathroom', '🚿', ('vanity',)),
]}


def get_item_template(key: str) -> ItemTemplate:
    try:
        return ITEM_TEMPLATES[key]
    except KeyError:
        raise NotFoundError(f"Item template '{key}' not found")


def get_room_template(key: str) -> RoomTemplate:
    try:
        return ROOM_TEMPLATES[key]
    except KeyError:
        raise NotFoundError(f"Room template '{key}' not found")


def room_icon(room_type: str) -> str:
    """Icon for a room type tag, with a generic fallback."""
    for template in ROOM_TEMPLATES.values():
        if template.room_type == room_type:
            return template.icon
    return '🏠'
