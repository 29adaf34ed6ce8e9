# cotacao/models/exchange_rate.py

from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlalchemy import DateTime, Integer, Text, func
from sqlalchemy.orm import Mapped, mapped_column

from cotacao.core.database import Base


class ExchangeRate(Base):
    """
    Uma linha por cotação buscada com sucesso. Só recebe INSERT.
    """
    __tablename__ = "exchange_rate"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)

    # bid como veio da API, ex.: "5.4321" (nunca convertido para float)
    rate: Mapped[Optional[str]] = mapped_column(Text)

    timestamp: Mapped[Optional[datetime]] = mapped_column(DateTime, server_default=func.current_timestamp())
