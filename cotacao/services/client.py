# cotacao/services/client.py

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import anyio
import httpx
from pydantic import ValidationError

from cotacao.core.config import Settings
from cotacao.core.errors import DecodeError, TransportError
from cotacao.schemas.quote import BidResponse
from cotacao.services.http import get_with_deadline

logger = logging.getLogger(__name__)

FILE_TEMPLATE = "Dólar: {bid}"


async def fetch_bid(
    url: str,
    timeout: float,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> str:
    """
    Pede a cotação ao servidor local. O prazo cobre a ida e volta inteira,
    inclusive a leitura do corpo.
    """
    response = await get_with_deadline(url, timeout=timeout, transport=transport)

    if response.status_code != httpx.codes.OK:
        raise TransportError(
            f"server returned non-200 status: {response.status_code} {response.reason_phrase}",
            status_code=response.status_code,
            payload=response.text,
        )

    try:
        return BidResponse.model_validate_json(response.content).bid
    except ValidationError as exc:
        raise DecodeError(f"decoding response from {url}: {exc}", payload=response.text) from exc


def write_quote_file(path: str | Path, bid: str) -> Path:
    """Sobrescreve o arquivo inteiro com `Dólar: <bid>` (sem quebra de linha final)."""
    target = Path(path)
    target.write_text(FILE_TEMPLATE.format(bid=bid), encoding="utf-8")
    return target


def run(settings: Settings, transport: Optional[httpx.AsyncBaseTransport] = None) -> Path:
    """
    Busca e grava. Qualquer erro antes da escrita sobe sem tocar no arquivo.
    """
    bid = anyio.run(fetch_bid, settings.CLIENT_URL, settings.CLIENT_TIMEOUT, transport)
    target = write_quote_file(settings.CLIENT_OUTPUT_FILE, bid)
    logger.info("Cotação salva em '%s'", target)
    return target
