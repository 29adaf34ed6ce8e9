from __future__ import annotations

from pathlib import Path

import pytest

from cotacao.core.config import Settings


@pytest.fixture
def database_url(tmp_path: Path) -> str:
    return f"sqlite:///{tmp_path / 'exchange_rate.db'}"


@pytest.fixture
def settings(database_url: str, tmp_path: Path) -> Settings:
    # prazo de gravação folgado; testes de estouro ajustam PERSIST_TIMEOUT
    return Settings(
        upstream_url="https://upstream.test/json/last/USD-BRL",
        database_url=database_url,
        fetch_timeout=0.2,
        persist_timeout=2.0,
        client_url="http://server.test/cotacao",
        client_output_file=str(tmp_path / "cotacao.txt"),
    )
