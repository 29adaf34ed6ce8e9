# cotacao/core/errors.py

from __future__ import annotations

from typing import Any, Optional


class QuoteError(RuntimeError):
    """Erro terminal de uma etapa da cadeia de cotação. Nunca há nova tentativa."""

    # Texto genérico devolvido ao chamador; o detalhe fica só no log
    public_message = "Internal server error"

    def __init__(self, message: str, *, status_code: Optional[int] = None, payload: Any | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.payload = payload


class FetchError(QuoteError):
    public_message = "Failed to fetch dollar rate"


class RequestConstructionError(FetchError):
    pass


class TransportError(FetchError):
    """Falha de rede, status não-2xx ou prazo estourado."""


class DecodeError(FetchError):
    pass


class PersistenceError(QuoteError):
    public_message = "Failed to save rate to database"


class EncodeError(QuoteError):
    public_message = "Failed to encode response"


__all__ = [
    "DecodeError",
    "EncodeError",
    "FetchError",
    "PersistenceError",
    "QuoteError",
    "RequestConstructionError",
    "TransportError",
]
