"""
Shared API state: the calculator session and price service the routers use.
"""
from ..config.settings import get_settings
from ..engine.pricing_engine import PricingEngine
from ..i18n.locale import get_locale
from ..services.item_collection import CalculatorSession
from ..services.notifications import Notifier
from ..services.price_feed import GoldPriceService


def build_session() -> CalculatorSession:
    settings = get_settings()
    return CalculatorSession(
        default_price_per_gram=settings.default_price_per_gram,
        engine=PricingEngine(currency=settings.currency_symbol),
        notifier=Notifier(),
        locale=get_locale(settings.default_language),
    )


session = build_session()
price_service = GoldPriceService.from_settings(get_settings())


def reset_state():
    """Start a fresh session and re-read settings (used by tests)."""
    global session, price_service
    session = build_session()
    price_service = GoldPriceService.from_settings(get_settings())
