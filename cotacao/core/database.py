# cotacao/core/database.py

from __future__ import annotations

from typing import Any, Dict, Generator

from fastapi import Request
from sqlalchemy import Engine, create_engine
from sqlalchemy.orm import Session, declarative_base, sessionmaker
from sqlalchemy.pool import NullPool

Base = declarative_base()


def make_engine(database_url: str, **connect_args: Any) -> Engine:
    """
    Engine sem pool: cada uso abre e fecha a própria conexão.
    """
    args: Dict[str, Any] = dict(connect_args)

    # Para SQLite, é importante usar connect_args={"check_same_thread": False}
    if database_url.startswith("sqlite"):
        args.setdefault("check_same_thread", False)

    return create_engine(
        database_url,
        connect_args=args,
        poolclass=NullPool,
        echo=False,
        future=True,
    )


# Dependência para endpoints de leitura
def get_db(request: Request) -> Generator[Session, None, None]:
    engine = make_engine(request.app.state.settings.DATABASE_URL)
    SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
        engine.dispose()
