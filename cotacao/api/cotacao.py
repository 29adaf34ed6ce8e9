from __future__ import annotations

import logging
from typing import List

from fastapi import APIRouter, Depends, Query, Request, status
from fastapi.responses import PlainTextResponse, Response
from sqlalchemy import inspect
from sqlalchemy.orm import Session

from cotacao.core.database import get_db
from cotacao.core.errors import QuoteError
from cotacao.models.exchange_rate import ExchangeRate
from cotacao.schemas.quote import BidResponse, ExchangeRateOut
from cotacao.services.cotacao import QuoteHandler

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/cotacao", tags=["cotacao"])


def get_quote_handler(request: Request) -> QuoteHandler:
    # Um handler por requisição; fetcher e store vêm do app
    return QuoteHandler(
        fetcher=request.app.state.fetcher,
        store=request.app.state.store,
    )


@router.get(
    "",
    response_model=BidResponse,
    responses={500: {"description": "Falha ao buscar, gravar ou codificar a cotação"}},
)
async def get_cotacao(handler: QuoteHandler = Depends(get_quote_handler)):
    """
    Busca o dólar na API externa, grava no banco e devolve {"bid": "..."}.
    """
    try:
        body = await handler.handle()
    except QuoteError as e:
        logger.error("%s: %s (causa: %r)", e.public_message, e, e.__cause__)
        if e.payload is not None:
            logger.error("Resposta recebida: %.500s", e.payload)
        return PlainTextResponse(e.public_message, status_code=status.HTTP_500_INTERNAL_SERVER_ERROR)

    return Response(content=body, media_type="application/json")


@router.get("/historico", response_model=List[ExchangeRateOut])
def list_rates(limit: int = Query(default=20, ge=1, le=1000), db: Session = Depends(get_db)):
    """
    Últimas cotações gravadas, da mais recente para a mais antiga.
    """
    # A tabela só existe depois da primeira gravação
    if not inspect(db.get_bind()).has_table(ExchangeRate.__tablename__):
        return []

    rows = (
        db.query(ExchangeRate)
        .order_by(ExchangeRate.id.desc())
        .limit(limit)
        .all()
    )
    return [ExchangeRateOut.model_validate(row) for row in rows]
