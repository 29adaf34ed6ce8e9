# cotacao/services/persistence.py

from __future__ import annotations

import logging
from functools import partial
from typing import Any, Dict, Protocol, Sequence

import anyio
import anyio.to_thread
from sqlalchemy import Connection, insert
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.schema import CreateTable
from sqlalchemy.sql.base import Executable

from cotacao.core.database import make_engine
from cotacao.core.deadline import Deadline
from cotacao.core.errors import PersistenceError
from cotacao.models.exchange_rate import ExchangeRate

logger = logging.getLogger(__name__)

# Instruções SQLite executadas entre cada verificação do prazo
PROGRESS_HANDLER_STEPS = 1000


class SqlExecutor(Protocol):
    def execute(self, statements: Sequence[Executable], deadline: Deadline) -> None:
        """
        Executa tudo numa transação. Estouro de prazo levanta TimeoutError;
        qualquer outra exceção é tratada como falha de gravação.
        """
        ...


class EngineExecutor:
    """
    Abre uma conexão nova a cada chamada (sem pool) e fecha ao final.
    """

    def __init__(self, database_url: str) -> None:
        self.database_url = database_url

    def execute(self, statements: Sequence[Executable], deadline: Deadline) -> None:
        deadline.check("open")

        connect_args: Dict[str, Any] = {}
        if self.database_url.startswith("sqlite"):
            # espera por lock limitada ao que sobrou do prazo
            connect_args["timeout"] = deadline.remaining()

        engine = make_engine(self.database_url, **connect_args)
        try:
            with engine.begin() as conn:
                self._bind_deadline(conn, deadline)
                for statement in statements:
                    deadline.check("execute")
                    conn.execute(statement)
        finally:
            engine.dispose()

    @staticmethod
    def _bind_deadline(conn: Connection, deadline: Deadline) -> None:
        if conn.dialect.name != "sqlite":
            return
        raw = conn.connection.driver_connection
        # retorno != 0 interrompe a instrução em andamento
        raw.set_progress_handler(lambda: 1 if deadline.expired else 0, PROGRESS_HANDLER_STEPS)


def rate_statements(bid: str) -> list[Executable]:
    return [
        CreateTable(ExchangeRate.__table__, if_not_exists=True),
        insert(ExchangeRate).values(rate=bid),
    ]


class RateStore:
    """
    Grava o bid com prazo próprio, medido a partir do início da gravação
    e isolado do cancelamento da requisição de entrada.
    """

    def __init__(self, executor: SqlExecutor, timeout: float) -> None:
        self.executor = executor
        self.timeout = timeout

    async def save(self, bid: str) -> None:
        deadline = Deadline(self.timeout)
        work = partial(self.executor.execute, rate_statements(bid), deadline)

        try:
            with anyio.fail_after(self.timeout, shield=True):
                await anyio.to_thread.run_sync(work, abandon_on_cancel=True)
        except TimeoutError as exc:
            raise PersistenceError(f"saving rate {bid!r}: deadline of {self.timeout}s exceeded") from exc
        except SQLAlchemyError as exc:
            raise PersistenceError(f"saving rate {bid!r}: {exc}") from exc
        except Exception as exc:
            # driver ausente ou erro DBAPI cru de um executor próprio
            raise PersistenceError(f"saving rate {bid!r}: {exc!r}") from exc

        logger.debug("Cotação gravada: %s", bid)
