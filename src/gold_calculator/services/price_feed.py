"""
Gold Price Feed - fetches a live gold price page through a scrape API.

The quote is display-only: it never updates line items. Users copy a
price into an item by hand.
"""
import asyncio
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

import httpx

from ..config.settings import Settings

logger = logging.getLogger(__name__)

MISSING_CREDENTIAL = "missing_credential"
TIMEOUT = "timeout"
NETWORK_ERROR = "network_error"
HTTP_ERROR = "http_error"
BAD_RESPONSE = "bad_response"


@dataclass
class QuoteResult:
    success: bool
    data: Optional[Dict[str, Any]] = None
    error_message: Optional[str] = None
    error_code: Optional[str] = None

    @classmethod
    def failure(cls, code: str, message: str) -> 'QuoteResult':
        return cls(success=False, error_message=message, error_code=code)


class CredentialStore:
    """API key for the price lookup, kept in a small file between runs."""

    def __init__(self, path: Path):
        self.path = Path(path)

    def get(self) -> Optional[str]:
        if not self.path.exists():
            return None
        value = self.path.read_text(encoding='utf-8').strip()
        return value or None

    def save(self, credential: str):
        credential = (credential or "").strip()
        if not credential:
            raise ValueError("API key must not be empty")
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(credential, encoding='utf-8')
        try:
            os.chmod(self.path, 0o600)
        except OSError as e:
            logger.warning("Could not restrict permissions on %s: %s", self.path, e)
        logger.info("Price lookup API key saved")

    def clear(self):
        if self.path.exists():
            self.path.unlink()
            logger.info("Price lookup API key removed")


class GoldPriceService:
    """
    Fetch a gold price quote from the configured scrape endpoint.

    Expected failures (no key, timeout, HTTP error, unusable payload) come
    back as QuoteResult(success=False); only cancellation propagates.
    """

    def __init__(
        self,
        credentials: CredentialStore,
        endpoint: str,
        page_url: str,
        timeout: float = 15.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.credentials = credentials
        self.endpoint = endpoint
        self.page_url = page_url
        self.timeout = timeout
        self._transport = transport

    @classmethod
    def from_settings(cls, settings: Settings, transport: Optional[httpx.AsyncBaseTransport] = None) -> 'GoldPriceService':
        return cls(
            credentials=CredentialStore(settings.credential_path),
            endpoint=settings.quote_endpoint,
            page_url=settings.quote_page_url,
            timeout=settings.quote_timeout,
            transport=transport,
        )

    def has_credential(self) -> bool:
        return self.credentials.get() is not None

    async def fetch_quote(self) -> QuoteResult:
        api_key = self.credentials.get()
        if not api_key:
            return QuoteResult.failure(
                MISSING_CREDENTIAL, "API key not found. Please set your API key first."
            )

        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                resp = await client.post(
                    self.endpoint,
                    json={"url": self.page_url, "formats": ["markdown"]},
                    headers={
                        "Authorization": f"Bearer {api_key}",
                        "Content-Type": "application/json",
                    },
                )
        except httpx.TimeoutException:
            logger.warning("Gold price lookup timed out after %ss", self.timeout)
            return QuoteResult.failure(TIMEOUT, "The price service did not respond. Please try again.")
        except httpx.HTTPError as e:
            logger.error("Gold price lookup failed: %s", e)
            return QuoteResult.failure(NETWORK_ERROR, f"Could not reach the price service: {e}")

        try:
            payload = resp.json()
        except ValueError:
            payload = None

        if resp.status_code >= 400:
            detail = payload.get("error") if isinstance(payload, dict) else None
            message = f"Price service error (HTTP {resp.status_code})"
            if detail:
                message = f"{message}: {detail}"
            logger.error(message)
            return QuoteResult.failure(HTTP_ERROR, message)

        if not isinstance(payload, dict):
            return QuoteResult.failure(BAD_RESPONSE, "Price service returned an invalid response.")

        if not payload.get("success"):
            message = payload.get("error") or "Price service reported a failure."
            logger.error("Gold price lookup unsuccessful: %s", message)
            return QuoteResult.failure(BAD_RESPONSE, message)

        data = payload.get("data")
        if not isinstance(data, dict):
            return QuoteResult.failure(BAD_RESPONSE, "Price service response is missing 'data'.")

        logger.info("Fetched gold price quote from %s", self.page_url)
        return QuoteResult(success=True, data=data)

    def fetch_quote_sync(self) -> QuoteResult:
        """Blocking wrapper for callers without an event loop (the Streamlit UI)."""
        return asyncio.run(self.fetch_quote())
