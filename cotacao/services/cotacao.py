# cotacao/services/cotacao.py

from __future__ import annotations

import enum
import logging

from pydantic import ValidationError

from cotacao.core.errors import EncodeError
from cotacao.schemas.quote import BidResponse
from cotacao.services.exchange import ExchangeRateFetcher
from cotacao.services.persistence import RateStore

logger = logging.getLogger(__name__)


class HandlerState(str, enum.Enum):
    START = "start"
    FETCHING = "fetching"
    PERSISTING = "persisting"
    RESPONDING = "responding"
    DONE = "done"
    FAILED = "failed"


class QuoteHandler:
    """
    Uma requisição de /cotacao: busca -> grava -> responde.

    Qualquer falha leva a FAILED e a exceção sobe; não há nova tentativa
    nem resposta parcial.
    """

    def __init__(self, fetcher: ExchangeRateFetcher, store: RateStore) -> None:
        self.fetcher = fetcher
        self.store = store
        self.state = HandlerState.START

    def _enter(self, state: HandlerState) -> None:
        logger.debug("cotacao: %s -> %s", self.state.value, state.value)
        self.state = state

    async def handle(self) -> bytes:
        try:
            self._enter(HandlerState.FETCHING)
            quote = await self.fetcher.fetch()

            self._enter(HandlerState.PERSISTING)
            await self.store.save(quote.bid)

            self._enter(HandlerState.RESPONDING)
            body = self._encode(quote.bid)
        except Exception:
            self._enter(HandlerState.FAILED)
            raise

        self._enter(HandlerState.DONE)
        return body

    @staticmethod
    def _encode(bid: str) -> bytes:
        try:
            return BidResponse(bid=bid).model_dump_json().encode("utf-8")
        except (ValidationError, ValueError, TypeError) as exc:
            raise EncodeError(f"encoding bid {bid!r}: {exc}") from exc
