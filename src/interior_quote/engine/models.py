"""
Data models for the quotation builder.

Uses dataclasses for structured data representation. The rate card is an
immutable value: editing it produces a new RateConfiguration, so a pricing
pass never observes a half-edited rate card.
"""
import hashlib
import json
from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import Mapping, Optional

from .entry import new_id, coerce_dimension, coerce_quantity


@dataclass
class TraceStep:
    """A single step in a line item price breakdown."""
    step: str
    description: str
    value: Optional[str] = None


@dataclass(frozen=True)
class RateConfiguration:
    """
    Rate card used to price line items.

    Rates are currency per square foot, multipliers are dimensionless,
    tax_rate is a percentage. Unknown material and finish keys price at 0,
    unknown hardware tiers at a multiplier of 1.
    """
    materials: Mapping[str, float] = field(default_factory=dict)
    finishes: Mapping[str, float] = field(default_factory=dict)
    hardware_multipliers: Mapping[str, float] = field(default_factory=dict)
    labor_rate_sqft: float = 0.0
    tax_rate: float = 0.0
    design_fee_fixed: float = 0.0

    def __post_init__(self):
        from .rates import validate_rates
        from ..errors import RateConfigurationError

        result = validate_rates({
            'materials': self.materials,
            'finishes': self.finishes,
            'hardware_multipliers': self.hardware_multipliers,
            'labor_rate_sqft': self.labor_rate_sqft,
            'tax_rate': self.tax_rate,
            'design_fee_fixed': self.design_fee_fixed,
        })
        if not result.valid:
            raise RateConfigurationError(result.errors)

        # Read-only views over private copies
        for name in ('materials', 'finishes', 'hardware_multipliers'):
            table = {k: float(v) for k, v in getattr(self, name).items()}
            object.__setattr__(self, name, MappingProxyType(table))
        for name in ('labor_rate_sqft', 'tax_rate', 'design_fee_fixed'):
            object.__setattr__(self, name, float(getattr(self, name)))

    def material_rate(self, material: str) -> float:
        return self.materials.get(material, 0.0)

    def finish_rate(self, finish: str) -> float:
        return self.finishes.get(finish, 0.0)

    def hardware_multiplier(self, hardware: str) -> float:
        return self.hardware_multipliers.get(hardware, 1.0)

    def with_updates(self, **changes) -> 'RateConfiguration':
        """Return a copy with the given fields replaced."""
        return replace(self, **changes)

    def with_material(self, name: str, rate: float) -> 'RateConfiguration':
        return self.with_updates(materials={**self.materials, name: rate})

    def with_finish(self, name: str, rate: float) -> 'RateConfiguration':
        return self.with_updates(finishes={**self.finishes, name: rate})

    def with_hardware(self, name: str, multiplier: float) -> 'RateConfiguration':
        return self.with_updates(hardware_multipliers={**self.hardware_multipliers, name: multiplier})

    def without_material(self, name: str) -> 'RateConfiguration':
        return self.with_updates(materials={k: v for k, v in self.materials.items() if k != name})

    def without_finish(self, name: str) -> 'RateConfiguration':
        return self.with_updates(finishes={k: v for k, v in self.finishes.items() if k != name})

    def without_hardware(self, name: str) -> 'RateConfiguration':
        return self.with_updates(
            hardware_multipliers={k: v for k, v in self.hardware_multipliers.items() if k != name}
        )

    def to_dict(self) -> dict:
        """Serialize using the key names stored in saved quotations."""
        return {
            'materials': dict(self.materials),
            'finishes': dict(self.finishes),
            'hardwareMultipliers': dict(self.hardware_multipliers),
            'laborRateSqFt': self.labor_rate_sqft,
            'taxRate': self.tax_rate,
            'designFeeFixed': self.design_fee_fixed,
        }

    @classmethod
    def from_dict(cls, data: dict) -> 'RateConfiguration':
        """
        Build a validated rate card from a dict.

        Accepts both the stored camelCase keys and snake_case field names.
        Raises RateConfigurationError when validation fails.
        """
        from .rates import normalize_rate_keys

        return cls(**normalize_rate_keys(data))


@dataclass
class LineItem:
    """A single priced piece of joinery within a room (dimensions in feet)."""
    id: str
    name: str
    width: float = 0.0
    height: float = 0.0
    depth: float = 0.0  # presentational only, never priced
    material: str = ""
    finish: str = ""
    hardware: str = ""
    qty: int = 1

    @property
    def area(self) -> float:
        return self.width * self.height

    def to_dict(self) -> dict:
        return {
            'id': self.id,
            'name': self.name,
            'width': self.width,
            'height': self.height,
            'depth': self.depth,
            'material': self.material,
            'finish': self.finish,
            'hardware': self.hardware,
            'qty': self.qty,
        }

    @classmethod
    def from_dict(cls, data: dict) -> 'LineItem':
        """
        Build a line item from stored or hand-written JSON.

        Dimensions and qty follow the data-entry rules; a blank id gets a
        fresh one. Raises InvalidEntryError on a bad number.
        """
        return cls(
            id=str(data.get('id') or '').strip() or new_id(),
            name=data.get('name', ''),
            width=coerce_dimension(data.get('width'), 'width'),
            height=coerce_dimension(data.get('height'), 'height'),
            depth=coerce_dimension(data.get('depth'), 'depth'),
            material=data.get('material', ''),
            finish=data.get('finish', ''),
            hardware=data.get('hardware', ''),
            qty=coerce_quantity(data.get('qty')),
        )


@dataclass
class Room:
    """A room in the project. Item order is display order."""
    id: str
    name: str
    room_type: str = "custom"
    items: list[LineItem] = field(default_factory=list)

    def get_item(self, item_id: str) -> Optional[LineItem]:
        for item in self.items:
            if item.id == item_id:
                return item
        return None

    def to_dict(self) -> dict:
        return {
            'id': self.id,
            'name': self.name,
            'type': self.room_type,
            'items': [item.to_dict() for item in self.items],
        }

    @classmethod
    def from_dict(cls, data: dict) -> 'Room':
        items = []
        seen = set()
        for entry in data.get('items', []):
            item = LineItem.from_dict(entry)
            # Item ids are unique within a room
            while item.id in seen:
                item.id = new_id()
            seen.add(item.id)
            items.append(item)

        return cls(
            id=str(data.get('id') or '').strip() or new_id(),
            name=data.get('name', ''),
            room_type=data.get('type', data.get('room_type', 'custom')),
            items=items,
        )


@dataclass
class Client:
    """Client and property details printed on the quotation."""
    name: str = ""
    contact: str = ""
    address: str = ""
    property_type: str = ""
    carpet_area: float = 0.0
    email: str = ""
    quote_date: Optional[str] = None  # ISO date string

    def to_dict(self) -> dict:
        return {
            'name': self.name,
            'contact': self.contact,
            'address': self.address,
            'propertyType': self.property_type,
            'carpetArea': self.carpet_area,
            'email': self.email,
            'quoteDate': self.quote_date,
        }

    @classmethod
    def from_dict(cls, data: dict) -> 'Client':
        return cls(
            name=data.get('name', ''),
            contact=data.get('contact', ''),
            address=data.get('address', ''),
            property_type=data.get('propertyType', data.get('property_type', '')),
            carpet_area=float(data.get('carpetArea', data.get('carpet_area', 0)) or 0),
            email=data.get('email', ''),
            quote_date=data.get('quoteDate', data.get('quote_date')),
        )


@dataclass
class Project:
    """A quotation: client record, ordered rooms and the rate card in effect."""
    client: Client = field(default_factory=Client)
    rooms: list[Room] = field(default_factory=list)
    rates: RateConfiguration = field(default_factory=RateConfiguration)

    def get_room(self, room_id: str) -> Optional[Room]:
        for room in self.rooms:
            if room.id == room_id:
                return room
        return None

    def to_dict(self) -> dict:
        return {
            'client': self.client.to_dict(),
            'rooms': [room.to_dict() for room in self.rooms],
            'rates': self.rates.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: dict) -> 'Project':
        rates = data.get('rates')
        rooms = []
        for entry in data.get('rooms', []):
            room = Room.from_dict(entry)
            while any(r.id == room.id for r in rooms):
                room.id = new_id()
            rooms.append(room)

        return cls(
            client=Client.from_dict(data.get('client', {})),
            rooms=rooms,
            rates=RateConfiguration.from_dict(rates) if rates else RateConfiguration(),
        )

    def fingerprint(self) -> str:
        """Content hash of rooms, items and rates; changes on any mutation."""
        payload = json.dumps(
            {'rooms': [r.to_dict() for r in self.rooms], 'rates': self.rates.to_dict()},
            sort_keys=True,
        )
        return hashlib.sha256(payload.encode('utf-8')).hexdigest()


@dataclass(frozen=True)
class RoomTotal:
    """Summed price of one room's items."""
    id: str
    total: float


@dataclass(frozen=True)
class Totals:
    """
    Derived totals for a project. Recomputed, never edited.

    item_totals is keyed by (room id, item id); item ids are only unique
    within their room.
    """
    subtotal: float
    tax: float
    grand_total: float
    room_totals: tuple[RoomTotal, ...] = ()
    item_totals: Mapping[tuple[str, str], float] = field(default_factory=dict)

    def __post_init__(self):
        object.__setattr__(self, 'room_totals', tuple(self.room_totals))
        object.__setattr__(self, 'item_totals', MappingProxyType(dict(self.item_totals)))

    def room_total(self, room_id: str) -> float:
        for rt in self.room_totals:
            if rt.id == room_id:
                return rt.total
        return 0.0

    def item_total(self, room_id: str, item_id: str) -> float:
        return self.item_totals.get((room_id, item_id), 0.0)

    def to_dict(self) -> dict:
        return {
            'subtotal': self.subtotal,
            'tax': self.tax,
            'grandTotal': self.grand_total,
            'roomTotals': [{'id': rt.id, 'total': rt.total} for rt in self.room_totals],
        }


@dataclass
class LineBreakdown:
    """Intermediate values behind a line item price."""
    item_id: str
    area: float
    material_rate: float
    finish_rate: float
    labor_rate: float
    base_rate: float
    hardware_multiplier: float
    unit_cost: float
    qty: int
    amount: float
    warnings: list[str] = field(default_factory=list)
    trace: list[TraceStep] = field(default_factory=list)

    def add_trace(self, step: str, description: str, value: str = None):
        """Add a step to the trace for this line item."""
        self.trace.append(TraceStep(step=step, description=description, value=value))

    def add_warning(self, warning: str):
        self.warnings.append(warning)

    def get_trace_text(self) -> str:
        """Get human-readable trace as formatted text."""
        lines = []
        for t in self.trace:
            if t.value:
                lines.append(f"→ {t.step}: {t.description} = {t.value}")
            else:
                lines.append(f"→ {t.step}: {t.description}")
        return "\n".join(lines)
