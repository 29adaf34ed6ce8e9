from __future__ import annotations

import json
from typing import Any, Callable, Dict, List, Sequence

import httpx

from cotacao.core.deadline import Deadline


def upstream_payload(bid: str = "5.4321") -> Dict[str, Any]:
    return {
        "USDBRL": {
            "code": "USD",
            "codein": "BRL",
            "name": "Dólar Americano/Real Brasileiro",
            "high": "5.4500",
            "low": "5.4012",
            "varBid": "0.0123",
            "pctChange": "0.23",
            "bid": bid,
            "ask": "5.4331",
            "timestamp": "1718049600",
            "create_date": "2024-06-10 17:00:00",
        }
    }


def json_transport(payload: Any, status_code: int = 200) -> httpx.MockTransport:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(status_code, content=json.dumps(payload).encode("utf-8"))

    return httpx.MockTransport(handler)


class RecordingExecutor:
    """SqlExecutor falso: guarda as instruções recebidas, sem banco."""

    def __init__(self, error: Exception | None = None, hook: Callable[[], None] | None = None) -> None:
        self.error = error
        self.hook = hook
        self.calls: List[Sequence[Any]] = []

    def execute(self, statements: Sequence[Any], deadline: Deadline) -> None:
        if self.hook is not None:
            self.hook()
        if self.error is not None:
            raise self.error
        self.calls.append(statements)
