from typing import Optional

from fastapi import FastAPI, Header, HTTPException
from fastapi.middleware.cors import CORSMiddleware

from .. import __version__
from ..engine.pricing_engine import explain_line_item
from ..engine.models import RateConfiguration
from ..errors import NotFoundError, RateConfigurationError
from ..services.templates import ITEM_TEMPLATES, ROOM_TEMPLATES
from . import state
from .rates_api import router as rates_router
from .schemas import (
    ProjectIn, PriceItemRequest, TotalsResponse, BreakdownResponse, SnapshotResponse,
)

app = FastAPI(
    title="Interior Quote Builder API",
    description="Prices interior-design quotations against an editable rate card",
    version=__version__,
)

# Enable CORS for frontend development
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(rates_router)


def _rates_or_default(raw: Optional[dict]) -> RateConfiguration:
    if raw is None:
        return state.rate_card.get()
    try:
        return RateConfiguration.from_dict(raw)
    except RateConfigurationError as e:
        raise HTTPException(status_code=400, detail={"errors": e.errors})


def _require_user(user_id: Optional[str]) -> str:
    if not user_id or not user_id.strip():
        raise HTTPException(status_code=401, detail="X-User-Id header required")
    return user_id.strip()


@app.get("/")
async def root():
    return {"status": "online", "message": "Interior Quote Builder API Active"}


@app.get("/templates/rooms")
async def room_templates():
    return [t.to_dict() for t in ROOM_TEMPLATES.values()]


@app.get("/templates/items")
async def item_templates():
    return [t.to_dict() for t in ITEM_TEMPLATES.values()]


@app.post("/price/item", response_model=BreakdownResponse)
async def price_item(req: PriceItemRequest):
    """Price one line item and return its full breakdown."""
    rates = _rates_or_default(req.rates)
    return BreakdownResponse.from_breakdown(explain_line_item(req.item.to_model(), rates))


@app.post("/quote", response_model=TotalsResponse)
async def quote(req: ProjectIn):
    """Compute item, room, sub, tax and grand totals for a project."""
    project = req.to_model(_rates_or_default(req.rates))
    return TotalsResponse.from_totals(state.engine.totals(project))


@app.post("/snapshots", response_model=SnapshotResponse)
async def save_snapshot(req: ProjectIn, x_user_id: Optional[str] = Header(default=None)):
    """Save a priced snapshot of a project for the calling user."""
    user_id = _require_user(x_user_id)
    project = req.to_model(_rates_or_default(req.rates))
    totals = state.engine.totals(project)

    result = state.snapshot_store.save(user_id, project, totals)
    if not result.ok:
        raise HTTPException(status_code=502, detail={"status": result.status, "error": result.error})
    return SnapshotResponse(
        status=result.status,
        snapshot_id=result.snapshot_id,
        totals=TotalsResponse.from_totals(totals),
    )


@app.get("/snapshots")
async def list_snapshots(x_user_id: Optional[str] = Header(default=None)):
    user_id = _require_user(x_user_id)
    return state.snapshot_store.list_snapshots(user_id)


@app.get("/snapshots/{snapshot_id}")
async def get_snapshot(snapshot_id: str, x_user_id: Optional[str] = Header(default=None)):
    user_id = _require_user(x_user_id)
    try:
        return state.snapshot_store.load(user_id, snapshot_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
