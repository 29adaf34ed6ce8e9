# server.py

from __future__ import annotations

import logging
from typing import Optional

import httpx
import uvicorn
from fastapi import FastAPI

from cotacao.core.config import Settings, settings as default_settings
from cotacao.services.exchange import ExchangeRateFetcher
from cotacao.services.persistence import EngineExecutor, RateStore, SqlExecutor

from cotacao.api.cotacao import router as cotacao_router

logger = logging.getLogger(__name__)


def create_app(
    settings: Optional[Settings] = None,
    *,
    upstream_transport: Optional[httpx.AsyncBaseTransport] = None,
    executor: Optional[SqlExecutor] = None,
) -> FastAPI:
    settings = settings or default_settings

    app = FastAPI(
        title="Cotação USD-BRL",
        version="0.1.0",
    )

    app.state.settings = settings
    app.state.fetcher = ExchangeRateFetcher(
        settings.UPSTREAM_URL,
        timeout=settings.FETCH_TIMEOUT,
        transport=upstream_transport,
    )
    app.state.store = RateStore(
        executor or EngineExecutor(settings.DATABASE_URL),
        timeout=settings.PERSIST_TIMEOUT,
    )

    app.include_router(cotacao_router)

    @app.get("/health")
    def health_check():
        return {"status": "ok"}

    return app


app = create_app()


def main() -> None:
    logging.basicConfig(
        level=default_settings.LOG_LEVEL,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    # Reduz o ruído das bibliotecas
    logging.getLogger("httpx").setLevel(logging.WARNING)

    logger.info("Server running on %s:%s", default_settings.SERVER_HOST, default_settings.SERVER_PORT)
    uvicorn.run(app, host=default_settings.SERVER_HOST, port=default_settings.SERVER_PORT)


if __name__ == "__main__":
    main()
