"""
Item Collection - the user's line items and the controller that edits them.

ItemCollection is immutable: add/remove/update return a new collection with
the affected entry structurally replaced. CalculatorSession owns the current
collection and recomputes totals after every edit.
"""
import logging
from dataclasses import dataclass, replace
from typing import Any, Callable, Iterable, Iterator, Optional

from ..engine.inputs import parse_amount, parse_quantity, parse_tax_mode
from ..engine.models import LineItem, PercentageTax, Result, TaxMode, Totals
from ..engine.pricing_engine import PricingEngine, compute_grand_total
from ..i18n.locale import Locale
from .notifications import Notifier

logger = logging.getLogger(__name__)


def _set_weight(item: LineItem, raw: Any) -> LineItem:
    return replace(item, weight=parse_amount(raw))


def _set_quantity(item: LineItem, raw: Any) -> LineItem:
    return replace(item, quantity=parse_quantity(raw))


def _set_price_per_gram(item: LineItem, raw: Any) -> LineItem:
    return replace(item, price_per_gram=parse_amount(raw))


def _set_tax_mode(item: LineItem, raw: Any) -> LineItem:
    return item.with_tax_mode(parse_tax_mode(raw))


def _set_tax_value(item: LineItem, raw: Any) -> LineItem:
    return item.with_tax_value(parse_amount(raw))


def _set_provider_fee(item: LineItem, raw: Any) -> LineItem:
    return replace(item, provider_fee=parse_amount(raw))


FIELD_SETTERS: dict[str, Callable[[LineItem, Any], LineItem]] = {
    'weight': _set_weight,
    'quantity': _set_quantity,
    'price_per_gram': _set_price_per_gram,
    'tax_mode': _set_tax_mode,
    'tax_value': _set_tax_value,
    'provider_fee': _set_provider_fee,
}

EDITABLE_FIELDS = tuple(FIELD_SETTERS)

# What an edit falls back to when the typed value would overflow the totals
FIELD_FALLBACKS = {
    'weight': 0.0,
    'quantity': 1,
    'price_per_gram': 0.0,
    'tax_mode': TaxMode.PERCENTAGE,
    'tax_value': 0.0,
    'provider_fee': 0.0,
}


def default_item(price_per_gram: float) -> LineItem:
    """A fresh line item with the configured default price."""
    return LineItem(
        weight=0.0,
        quantity=1,
        price_per_gram=price_per_gram,
        tax=PercentageTax(0.0),
        provider_fee=0.0,
    )


@dataclass(frozen=True)
class ItemCollection:
    """Ordered, immutable collection of line items."""
    items: tuple[LineItem, ...] = ()

    def __post_init__(self):
        ids = [item.id for item in self.items]
        if len(ids) != len(set(ids)):
            raise ValueError("Duplicate line item ids in collection")

    def __len__(self) -> int:
        return len(self.items)

    def __iter__(self) -> Iterator[LineItem]:
        return iter(self.items)

    def __contains__(self, item_id: str) -> bool:
        return any(item.id == item_id for item in self.items)

    def ids(self) -> list[str]:
        return [item.id for item in self.items]

    def get(self, item_id: str) -> Optional[LineItem]:
        """Get a single item by ID."""
        for item in self.items:
            if item.id == item_id:
                return item
        return None

    def add(self, item: Optional[LineItem] = None, default_price_per_gram: float = 0.0) -> 'ItemCollection':
        """Append an item (a default one if none is given)."""
        if item is None:
            item = default_item(default_price_per_gram)
        if item.id in self:
            raise ValueError(f"Item with ID '{item.id}' already exists")
        return ItemCollection(self.items + (item,))

    def extend(self, items: Iterable[LineItem]) -> 'ItemCollection':
        return ItemCollection(self.items + tuple(items))

    def remove(self, item_id: str) -> 'ItemCollection':
        """Drop an item. Removing an unknown id returns an equal collection."""
        return ItemCollection(tuple(item for item in self.items if item.id != item_id))

    def replace(self, new_item: LineItem) -> 'ItemCollection':
        """Swap in a new version of an existing item, keeping its position."""
        if new_item.id not in self:
            raise KeyError(new_item.id)
        return ItemCollection(tuple(
            new_item if item.id == new_item.id else item
            for item in self.items
        ))

    def update_field(self, item_id: str, field_name: str, raw_value: Any) -> 'ItemCollection':
        """
        Apply one field edit, coercing the raw value to a safe number.

        A value that would push the item or grand totals past the float range
        is replaced by the field's fallback (0, or 1 for quantity). If even
        that overflows, the item is left as it was.

        Raises:
            KeyError: unknown item id
            ValueError: unknown field name
        """
        setter = FIELD_SETTERS.get(field_name)
        if setter is None:
            raise ValueError(
                f"Unknown field '{field_name}'; expected one of {', '.join(EDITABLE_FIELDS)}"
            )
        item = self.get(item_id)
        if item is None:
            raise KeyError(item_id)

        for candidate in (raw_value, FIELD_FALLBACKS[field_name]):
            try:
                updated = self.replace(setter(item, candidate))
            except ValueError:
                continue
            if updated.has_finite_totals():
                return updated
        logger.warning("Edit of %s on item %s overflows; keeping the previous value", field_name, item_id)
        return self

    def totals(self) -> Totals:
        return compute_grand_total(self.items)

    def has_finite_totals(self) -> bool:
        try:
            return self.totals().is_finite
        except OverflowError:
            return False


class CalculatorSession:
    """
    Owns the current item collection for one user.

    Every mutation swaps in a new collection (last write wins) and returns
    the freshly computed Result.
    """

    def __init__(
        self,
        default_price_per_gram: float,
        engine: Optional[PricingEngine] = None,
        notifier: Optional[Notifier] = None,
        locale: Optional[Locale] = None,
    ):
        self.default_price_per_gram = default_price_per_gram
        self.engine = engine or PricingEngine()
        self.notifier = notifier or Notifier()
        self.locale = locale or Locale()
        self._collection = ItemCollection()

    @property
    def collection(self) -> ItemCollection:
        return self._collection

    @property
    def items(self) -> list[LineItem]:
        return list(self._collection)

    def _commit(self, collection: ItemCollection) -> Result:
        if not collection.has_finite_totals():
            raise ValueError("Grand totals overflow; the change was not applied")
        self._collection = collection
        return self.calculate()

    def calculate(self) -> Result:
        """Recompute breakdowns and grand totals from the current items."""
        return self.engine.calculate(self._collection)

    def totals(self) -> Totals:
        return self._collection.totals()

    def add_item(self, item: Optional[LineItem] = None) -> LineItem:
        """Add an item (default values unless given) and return it."""
        if item is None:
            item = default_item(self.default_price_per_gram)
        self._commit(self._collection.add(item))
        logger.debug("Added item %s", item.id)
        return item

    def extend(self, items: Iterable[LineItem]) -> Result:
        items = list(items)
        result = self._commit(self._collection.extend(items))
        logger.debug("Added %d items", len(items))
        return result

    def update_item(self, item_id: str, field_name: str, value: Any) -> LineItem:
        """Edit one field of an item and return the updated item."""
        self._commit(self._collection.update_field(item_id, field_name, value))
        logger.debug("Updated item %s: %s=%r", item_id, field_name, value)
        return self._collection.get(item_id)

    def remove_item(self, item_id: str) -> bool:
        """
        Remove an item. Returns False (and does nothing) if it was already gone.
        """
        if item_id not in self._collection:
            logger.debug("Remove ignored, no item %s", item_id)
            return False
        self._commit(self._collection.remove(item_id))
        logger.debug("Removed item %s", item_id)
        self.notifier.notify(
            self.locale.t("item.removed"),
            self.locale.t("item.removed_desc"),
        )
        return True

    def clear(self) -> Result:
        return self._commit(ItemCollection())
