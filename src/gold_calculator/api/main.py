from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field
from typing import List, Optional

from gold_calculator import __version__
from gold_calculator.config.logging_setup import configure_logging
from gold_calculator.config.settings import get_settings
from gold_calculator.engine import PricingEngine, LineItem, TaxMode
from gold_calculator.engine.models import make_tax, new_item_id
from gold_calculator.api.items_api import router as items_router
from gold_calculator.api.prices_api import router as prices_router
from gold_calculator.i18n.locale import get_locale

configure_logging()

app = FastAPI(
    title="Gold Calculator API",
    description="Line-item gold pricing with per-gram tax and provider fees",
    version=__version__
)

# Enable CORS for frontend development
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(items_router)
app.include_router(prices_router)


class ItemIn(BaseModel):
    id: Optional[str] = None
    weight: float = Field(0.0, ge=0, allow_inf_nan=False)
    quantity: int = Field(1, ge=1)
    price_per_gram: float = Field(0.0, ge=0, allow_inf_nan=False)
    tax_mode: TaxMode = TaxMode.PERCENTAGE
    tax_value: float = Field(0.0, ge=0, allow_inf_nan=False)
    provider_fee: float = Field(0.0, ge=0, allow_inf_nan=False)

    def to_line_item(self) -> LineItem:
        return LineItem(
            id=self.id or new_item_id(),
            weight=self.weight,
            quantity=self.quantity,
            price_per_gram=self.price_per_gram,
            tax=make_tax(self.tax_mode, self.tax_value),
            provider_fee=self.provider_fee,
        )


class CalcRequest(BaseModel):
    items: List[ItemIn] = Field(default_factory=list)


@app.get("/")
async def root():
    return {"status": "online", "message": "Gold Calculator API Active"}


@app.post("/calculate")
async def calculate(req: CalcRequest):
    """Stateless calculation over the items in the request body."""
    try:
        items = [item.to_line_item() for item in req.items]
        engine = PricingEngine(currency=get_settings().currency_symbol)
        result = engine.calculate(items)
    except (ValueError, OverflowError) as e:
        raise HTTPException(status_code=400, detail=str(e))
    if not result.totals.is_finite:
        raise HTTPException(status_code=400, detail="Grand totals overflow")
    return result.to_dict()


@app.get("/messages/{language}")
async def get_messages(language: str):
    """Display strings and text direction for a language."""
    from gold_calculator.i18n.messages import MESSAGES
    locale = get_locale(language)
    return {
        "language": locale.language,
        "direction": locale.direction,
        "messages": MESSAGES[locale.language],
    }


@app.get("/system/status")
async def get_status():
    settings = get_settings()
    return {
        "version": __version__,
        "default_price_per_gram": settings.default_price_per_gram,
        "currency_symbol": settings.currency_symbol,
        "default_language": settings.default_language,
    }
