# cotacao/core/config.py

from __future__ import annotations

import os
from typing import Optional

from dotenv import load_dotenv

# Caminho da raiz do projeto (onde estão server.py, client.py e o .env)
BASE_DIR = os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))
ENV_PATH = os.path.join(BASE_DIR, ".env")

# Carrega variáveis do arquivo .env, se existir
if os.path.exists(ENV_PATH):
    load_dotenv(ENV_PATH)


DEFAULT_UPSTREAM_URL = "https://economia.awesomeapi.com.br/json/last/USD-BRL"
DEFAULT_DATABASE_URL = "sqlite:///./exchange_rate.db"
DEFAULT_CLIENT_URL = "http://localhost:8080/cotacao"
DEFAULT_OUTPUT_FILE = "cotacao.txt"

# Prazos em segundos
DEFAULT_FETCH_TIMEOUT = 0.2
DEFAULT_PERSIST_TIMEOUT = 0.01
DEFAULT_CLIENT_TIMEOUT = 0.3


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    return float(raw) if raw else default


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    return int(raw) if raw else default


class Settings:
    """
    Configuração explícita do servidor e do cliente.

    Cada valor vem do argumento nomeado, senão da variável de ambiente,
    senão do padrão. Os componentes recebem uma instância na construção.
    """

    def __init__(
        self,
        *,
        upstream_url: Optional[str] = None,
        database_url: Optional[str] = None,
        server_host: Optional[str] = None,
        server_port: Optional[int] = None,
        fetch_timeout: Optional[float] = None,
        persist_timeout: Optional[float] = None,
        client_url: Optional[str] = None,
        client_timeout: Optional[float] = None,
        client_output_file: Optional[str] = None,
        log_level: Optional[str] = None,
    ) -> None:
        # Servidor
        self.UPSTREAM_URL: str = upstream_url or os.getenv("UPSTREAM_URL", DEFAULT_UPSTREAM_URL)
        self.DATABASE_URL: str = database_url or os.getenv("DATABASE_URL", DEFAULT_DATABASE_URL)
        self.SERVER_HOST: str = server_host or os.getenv("SERVER_HOST", "0.0.0.0")
        self.SERVER_PORT: int = server_port if server_port is not None else _env_int("SERVER_PORT", 8080)

        # Prazos independentes: busca (200ms) e gravação (10ms)
        self.FETCH_TIMEOUT: float = (
            fetch_timeout if fetch_timeout is not None
            else _env_float("FETCH_TIMEOUT_SECONDS", DEFAULT_FETCH_TIMEOUT)
        )
        self.PERSIST_TIMEOUT: float = (
            persist_timeout if persist_timeout is not None
            else _env_float("PERSIST_TIMEOUT_SECONDS", DEFAULT_PERSIST_TIMEOUT)
        )

        # Cliente
        self.CLIENT_URL: str = client_url or os.getenv("CLIENT_URL", DEFAULT_CLIENT_URL)
        self.CLIENT_TIMEOUT: float = (
            client_timeout if client_timeout is not None
            else _env_float("CLIENT_TIMEOUT_SECONDS", DEFAULT_CLIENT_TIMEOUT)
        )
        self.CLIENT_OUTPUT_FILE: str = client_output_file or os.getenv("CLIENT_OUTPUT_FILE", DEFAULT_OUTPUT_FILE)

        self.LOG_LEVEL: str = (log_level or os.getenv("LOG_LEVEL", "INFO")).upper()


settings = Settings()
