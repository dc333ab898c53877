"""
Pydantic request/response models for the HTTP API.

Numeric fields are validated here, at the point of entry, so non-numeric
dimensions and quantities never reach the pricing engine.
"""
from typing import Any, Optional

from pydantic import BaseModel, Field, model_validator

from ..engine.models import Client, LineItem, Project, RateConfiguration, Room, Totals, LineBreakdown
from ..engine.entry import new_id


class LineItemIn(BaseModel):
    """A line item as posted by a client."""
    id: Optional[str] = None
    name: str = "Item"
    width: float = Field(default=0.0, allow_inf_nan=False)
    height: float = Field(default=0.0, allow_inf_nan=False)
    depth: float = Field(default=0.0, allow_inf_nan=False)
    material: str = ""
    finish: str = ""
    hardware: str = ""
    qty: int = Field(default=1, ge=1)

    def to_model(self) -> LineItem:
        return LineItem(id=self.id or new_id(), **self.model_dump(exclude={'id'}))


class RoomIn(BaseModel):
    id: Optional[str] = None
    name: str = "Room"
    room_type: str = "custom"
    items: list[LineItemIn] = []

    def to_model(self) -> Room:
        return Room(
            id=self.id or new_id(),
            name=self.name,
            room_type=self.room_type,
            items=[item.to_model() for item in self.items],
        )


class ClientIn(BaseModel):
    name: str = ""
    contact: str = ""
    address: str = ""
    property_type: str = ""
    carpet_area: float = Field(default=0.0, ge=0, allow_inf_nan=False)
    email: str = ""
    quote_date: Optional[str] = None

    def to_model(self) -> Client:
        return Client(**self.model_dump())


class ProjectIn(BaseModel):
    """
    A project to price. Raw rate dicts are validated by
    RateConfiguration.from_dict; when omitted the live rate card is used.
    """
    client: ClientIn = Field(default_factory=ClientIn)
    rooms: list[RoomIn] = []
    rates: Optional[dict[str, Any]] = None

    @model_validator(mode='after')
    def check_unique_ids(self) -> 'ProjectIn':
        room_ids = [room.id for room in self.rooms if room.id]
        if len(room_ids) != len(set(room_ids)):
            raise ValueError("room ids must be unique")
        for room in self.rooms:
            item_ids = [item.id for item in room.items if item.id]
            if len(item_ids) != len(set(item_ids)):
                raise ValueError(f"item ids must be unique within room '{room.id or room.name}'")
        return self

    def to_model(self, rates: RateConfiguration) -> Project:
        return Project(
            client=self.client.to_model(),
            rooms=[room.to_model() for room in self.rooms],
            rates=rates,
        )


class PriceItemRequest(BaseModel):
    item: LineItemIn
    rates: Optional[dict[str, Any]] = None


class RoomTotalOut(BaseModel):
    id: str
    total: float


class TotalsResponse(BaseModel):
    """Response model for computed totals."""
    subtotal: float
    tax: float
    grandTotal: float
    roomTotals: list[RoomTotalOut]
    itemTotals: dict[str, dict[str, float]]  # room id -> item id -> amount

    @classmethod
    def from_totals(cls, totals: Totals) -> 'TotalsResponse':
        item_totals = {rt.id: {} for rt in totals.room_totals}
        for (room_id, item_id), amount in totals.item_totals.items():
            item_totals.setdefault(room_id, {})[item_id] = amount
        return cls(
            subtotal=totals.subtotal,
            tax=totals.tax,
            grandTotal=totals.grand_total,
            roomTotals=[RoomTotalOut(id=rt.id, total=rt.total) for rt in totals.room_totals],
            itemTotals=item_totals,
        )


class BreakdownResponse(BaseModel):
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
    warnings: list[str]
    trace: list[dict]

    @classmethod
    def from_breakdown(cls, breakdown: LineBreakdown) -> 'BreakdownResponse':
        data = {k: v for k, v in breakdown.__dict__.items() if k != 'trace'}
        data['trace'] = [t.__dict__ for t in breakdown.trace]
        return cls(**data)


class ValidationResponse(BaseModel):
    """Response model for rate card validation."""
    valid: bool
    errors: list[str]
    warnings: list[str]


class SnapshotResponse(BaseModel):
    status: str
    snapshot_id: Optional[str] = None
    totals: Optional[TotalsResponse] = None
