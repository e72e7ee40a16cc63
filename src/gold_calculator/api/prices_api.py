"""
Prices API - FastAPI router for the external gold price lookup.
"""
from fastapi import APIRouter, HTTPException
from pydantic import BaseModel

from . import state

router = APIRouter(prefix="/api/prices", tags=["prices"])


class CredentialUpdate(BaseModel):
    api_key: str


@router.get("/credential")
async def credential_status():
    """Whether an API key is configured (the key itself is never returned)."""
    return {"configured": state.price_service.has_credential()}


@router.put("/credential")
async def save_credential(update: CredentialUpdate):
    try:
        state.price_service.credentials.save(update.api_key)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return {"configured": True}


@router.delete("/credential")
async def clear_credential():
    state.price_service.credentials.clear()
    return {"configured": False}


@router.get("/quote")
async def fetch_quote():
    """Fetch the current gold price page. Display only; items are not touched."""
    result = await state.price_service.fetch_quote()
    if not result.success:
        raise HTTPException(
            status_code=502,
            detail={"code": result.error_code, "message": result.error_message},
        )
    return {"success": True, "data": result.data}
