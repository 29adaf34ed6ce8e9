# client.py

from __future__ import annotations

import logging
from typing import Optional

import typer

from cotacao.core.config import Settings
from cotacao.core.errors import QuoteError
from cotacao.services.client import run

logger = logging.getLogger("cotacao.client")

app = typer.Typer(
    name="cotacao-client",
    help="Busca a cotação do dólar no servidor local e grava em arquivo.",
    add_completion=False,
)


@app.command()
def main(
    url: Optional[str] = typer.Option(None, "--url", help="Endpoint do servidor (padrão: CLIENT_URL)."),
    timeout: Optional[float] = typer.Option(
        None, "--timeout", help="Prazo total em segundos (padrão: 0.3)."
    ),
    output: Optional[str] = typer.Option(None, "--output", "-o", help="Arquivo de saída (padrão: cotacao.txt)."),
):
    """Faz um único GET com prazo e grava `Dólar: <bid>`."""
    settings = Settings(client_url=url, client_timeout=timeout, client_output_file=output)

    logging.basicConfig(
        level=settings.LOG_LEVEL,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    logging.getLogger("httpx").setLevel(logging.WARNING)

    try:
        run(settings)
    except QuoteError as e:
        logger.error("Erro ao buscar cotação: %s", e)
        raise typer.Exit(code=1)
    except OSError as e:
        logger.error("Erro ao gravar arquivo: %s", e)
        raise typer.Exit(code=1)


if __name__ == "__main__":
    app()
