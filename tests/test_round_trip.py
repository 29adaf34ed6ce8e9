"""Ponta a ponta: JSON da API -> linha no banco -> resposta -> arquivo."""

import httpx
from fastapi.testclient import TestClient

from cotacao.services.client import run
from server import create_app

from tests.helpers import json_transport, upstream_payload


def test_bid_survives_whole_chain(settings, tmp_path):
    """O bid é idêntico em todas as etapas da cadeia."""
    settings.CLIENT_TIMEOUT = 2.0
    app = create_app(settings, upstream_transport=json_transport(upstream_payload("5.4987")))

    with TestClient(app) as server:

        def forward(request: httpx.Request) -> httpx.Response:
            # encaminha a chamada do cliente para o app em teste
            upstream = server.get(request.url.path)
            return httpx.Response(upstream.status_code, content=upstream.content)

        target = run(settings, transport=httpx.MockTransport(forward))
        stored = server.get("/cotacao/historico").json()

    assert [row["rate"] for row in stored] == ["5.4987"]
    assert target.read_bytes() == "Dólar: 5.4987".encode("utf-8")
