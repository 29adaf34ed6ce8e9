# cotacao/services/http.py

from __future__ import annotations

from typing import Optional

import anyio
import httpx

from cotacao.core.errors import RequestConstructionError, TransportError


async def get_with_deadline(
    url: str,
    *,
    timeout: float,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> httpx.Response:
    """
    Um único GET limitado por um prazo total (conexão, status e corpo).
    Devolve a resposta já lida; status não-2xx vira TransportError.

    Estouro de prazo vira TransportError, igual a qualquer falha de rede.
    """
    try:
        with anyio.fail_after(timeout):
            async with httpx.AsyncClient(timeout=timeout, transport=transport) as client:
                try:
                    request = client.build_request("GET", url)
                except httpx.InvalidURL as exc:
                    raise RequestConstructionError(f"invalid request to {url}: {exc}") from exc

                response = await client.send(request)
                response.raise_for_status()
                return response
    except TimeoutError as exc:
        raise TransportError(f"GET {url}: deadline of {timeout}s exceeded") from exc
    except httpx.HTTPStatusError as exc:
        resp = exc.response
        raise TransportError(
            f"GET {url}: unexpected status {resp.status_code} {resp.reason_phrase}",
            status_code=resp.status_code,
            payload=resp.text,
        ) from exc
    except httpx.HTTPError as exc:
        raise TransportError(f"GET {url}: {exc!r}") from exc
