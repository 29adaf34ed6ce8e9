# cotacao/core/deadline.py

from __future__ import annotations

import time


class DeadlineExceeded(TimeoutError):
    pass


class Deadline:
    """
    Prazo absoluto (relógio monotônico) para trabalho bloqueante fora do event loop.

    O código assíncrono usa `anyio.fail_after`; threads de banco não enxergam
    esse escopo, então recebem um Deadline e verificam entre as etapas.
    """

    def __init__(self, seconds: float) -> None:
        self.seconds = seconds
        self.expires_at = time.monotonic() + seconds

    def remaining(self) -> float:
        return max(0.0, self.expires_at - time.monotonic())

    @property
    def expired(self) -> bool:
        return time.monotonic() >= self.expires_at

    def check(self, step: str) -> None:
        if self.expired:
            raise DeadlineExceeded(f"{step}: deadline of {self.seconds}s exceeded")
