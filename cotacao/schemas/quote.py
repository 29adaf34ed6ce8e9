# cotacao/schemas/quote.py

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, StrictStr


class UsdBrlQuote(BaseModel):
    """
    Cotação como a AwesomeAPI devolve. Todos os campos são strings decimais;
    só o `bid` segue adiante.
    """
    model_config = ConfigDict(populate_by_name=True)

    code: str = ""
    codein: str = ""
    name: str = ""
    high: str = ""
    low: str = ""
    var_bid: str = Field(default="", alias="varBid")
    pct_change: str = Field(default="", alias="pctChange")
    bid: StrictStr
    ask: str = ""
    timestamp: str = ""
    create_date: str = ""


class UpstreamQuotePayload(BaseModel):
    # Resposta de /json/last/USD-BRL: {"USDBRL": {...}}
    model_config = ConfigDict(populate_by_name=True)

    usdbrl: UsdBrlQuote = Field(alias="USDBRL")


class BidResponse(BaseModel):
    bid: StrictStr


class ExchangeRateOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    rate: Optional[str]
    timestamp: Optional[datetime]
