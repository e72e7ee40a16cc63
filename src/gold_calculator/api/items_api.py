"""
Items API - FastAPI router for the calculator session's line items.

Field values are coerced the same way the UI coerces typed input:
invalid amounts become 0 and invalid quantities become 1.
"""
from typing import Optional, Union

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel

from ..engine.models import LineItem
from ..services.bulk_entry import parse_bulk_text
from ..services.item_collection import EDITABLE_FIELDS
from . import state

router = APIRouter(prefix="/api/items", tags=["items"])

RawValue = Union[float, str]


class ItemCreate(BaseModel):
    """Request model for adding an item. Omitted fields keep the defaults."""
    weight: Optional[RawValue] = None
    quantity: Optional[RawValue] = None
    price_per_gram: Optional[RawValue] = None
    tax_mode: Optional[str] = None
    tax_value: Optional[RawValue] = None
    provider_fee: Optional[RawValue] = None


class FieldUpdate(BaseModel):
    """Request model for editing one field of an item."""
    field: str
    value: Optional[RawValue] = None


class BulkRequest(BaseModel):
    text: str


def _item_response(item: LineItem) -> dict:
    data = item.to_dict()
    data["totals"] = state.session.engine.calculate_item(item).to_dict()
    return data


@router.get("")
async def list_items():
    """List the session's items in display order."""
    return [_item_response(item) for item in state.session.items]


@router.post("")
async def add_item(item_data: Optional[ItemCreate] = None):
    """Add a default item, then apply any fields given in the body."""
    session = state.session
    item = session.add_item()
    if item_data:
        for field_name, value in item_data.model_dump(exclude_none=True).items():
            item = session.update_item(item.id, field_name, value)
    return _item_response(item)


@router.get("/totals")
async def get_totals():
    """Per-item breakdowns and grand totals for the session."""
    return state.session.calculate().to_dict()


@router.post("/bulk")
async def add_bulk(request: BulkRequest):
    """Add items from pasted text, one per line."""
    session = state.session
    parsed = parse_bulk_text(request.text, session.default_price_per_gram)
    if parsed.items:
        try:
            session.extend(parsed.items)
        except ValueError as e:
            raise HTTPException(status_code=400, detail=str(e))
    return {
        "added": [_item_response(item) for item in parsed.items],
        "rejected": [
            {"line": r.line_number, "text": r.text, "reason": r.reason}
            for r in parsed.rejected
        ],
    }


@router.delete("")
async def clear_items():
    """Remove every item."""
    state.session.clear()
    return {"success": True}


@router.get("/{item_id}")
async def get_item(item_id: str):
    item = state.session.collection.get(item_id)
    if item is None:
        raise HTTPException(status_code=404, detail=f"Item '{item_id}' not found")
    return _item_response(item)


@router.patch("/{item_id}")
async def update_item(item_id: str, update: FieldUpdate):
    """Edit one field of an item."""
    if update.field not in EDITABLE_FIELDS:
        raise HTTPException(
            status_code=400,
            detail=f"Unknown field '{update.field}'; expected one of {', '.join(EDITABLE_FIELDS)}",
        )
    try:
        item = state.session.update_item(item_id, update.field, update.value)
    except KeyError:
        raise HTTPException(status_code=404, detail=f"Item '{item_id}' not found")
    return _item_response(item)


@router.delete("/{item_id}")
async def delete_item(item_id: str):
    """Remove an item. Removing an item that is already gone is a no-op."""
    removed = state.session.remove_item(item_id)
    notes = state.session.notifier.drain()
    return {
        "removed": removed,
        "notifications": [
            {"title": n.title, "description": n.description, "variant": n.variant}
            for n in notes
        ],
    }
