from __future__ import annotations

import logging
from typing import Optional

import httpx
from pydantic import ValidationError

from cotacao.core.errors import DecodeError
from cotacao.schemas.quote import UpstreamQuotePayload, UsdBrlQuote
from cotacao.services.http import get_with_deadline

logger = logging.getLogger(__name__)


class ExchangeRateFetcher:
    """Busca a cotação USD-BRL na AwesomeAPI com prazo de `timeout` segundos."""

    def __init__(
        self,
        url: str,
        timeout: float,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.url = url
        self.timeout = timeout
        self._transport = transport

    async def fetch(self) -> UsdBrlQuote:
        response = await get_with_deadline(self.url, timeout=self.timeout, transport=self._transport)

        try:
            payload = UpstreamQuotePayload.model_validate_json(response.content)
        except ValidationError as exc:
            raise DecodeError(f"unexpected payload from {self.url}: {exc}", payload=response.text) from exc

        quote = payload.usdbrl
        logger.debug("Cotação recebida: bid=%s create_date=%s", quote.bid, quote.create_date)
        return quote
