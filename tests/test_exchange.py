"""Testes da busca de cotação na API externa."""

import anyio
import httpx
import pytest

from cotacao.core.errors import DecodeError, FetchError, RequestConstructionError, TransportError
from cotacao.services.exchange import ExchangeRateFetcher

from tests.helpers import json_transport, upstream_payload

URL = "https://upstream.test/json/last/USD-BRL"


def _fetch(fetcher: ExchangeRateFetcher):
    return anyio.run(fetcher.fetch)


class TestExchangeRateFetcher:
    """Testes de ExchangeRateFetcher."""

    def test_parses_quote_fields(self):
        """Expõe todos os campos da API, mantidos como strings."""
        fetcher = ExchangeRateFetcher(URL, timeout=0.2, transport=json_transport(upstream_payload("5.4321")))

        quote = _fetch(fetcher)

        assert quote.bid == "5.4321"
        assert quote.code == "USD"
        assert quote.codein == "BRL"
        assert quote.var_bid == "0.0123"
        assert quote.pct_change == "0.23"
        assert quote.create_date == "2024-06-10 17:00:00"

    def test_bid_is_not_reformatted(self):
        """Zeros à direita e precisão chegam intactos."""
        fetcher = ExchangeRateFetcher(URL, timeout=0.2, transport=json_transport(upstream_payload("5.43000000001")))

        assert _fetch(fetcher).bid == "5.43000000001"

    def test_requests_configured_url(self):
        """Faz um único GET na URL configurada."""
        seen = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append((request.method, str(request.url)))
            return httpx.Response(200, json=upstream_payload())

        fetcher = ExchangeRateFetcher(URL, timeout=0.2, transport=httpx.MockTransport(handler))
        _fetch(fetcher)

        assert seen == [("GET", URL)]

    def test_non_success_status_is_transport_error(self):
        """Um 5xx da API é falha de busca, com o status guardado."""
        fetcher = ExchangeRateFetcher(URL, timeout=0.2, transport=json_transport({"message": "down"}, 503))

        with pytest.raises(TransportError) as exc_info:
            _fetch(fetcher)

        assert exc_info.value.status_code == 503
        assert isinstance(exc_info.value, FetchError)

    def test_malformed_json_is_decode_error(self):
        """Corpo que não é JSON levanta DecodeError."""
        transport = httpx.MockTransport(lambda request: httpx.Response(200, content=b"<html>oops"))
        fetcher = ExchangeRateFetcher(URL, timeout=0.2, transport=transport)

        with pytest.raises(DecodeError):
            _fetch(fetcher)

    def test_missing_usdbrl_key_is_decode_error(self):
        """Falha quando não há a chave USDBRL."""
        fetcher = ExchangeRateFetcher(URL, timeout=0.2, transport=json_transport({"EURBRL": {"bid": "6.0"}}))

        with pytest.raises(DecodeError):
            _fetch(fetcher)

    def test_numeric_bid_is_decode_error(self):
        """Bid enviado como número JSON é rejeitado, não convertido."""
        payload = upstream_payload()
        payload["USDBRL"]["bid"] = 5.43
        fetcher = ExchangeRateFetcher(URL, timeout=0.2, transport=json_transport(payload))

        with pytest.raises(DecodeError):
            _fetch(fetcher)

    def test_deadline_exceeded_is_transport_error(self):
        """API lenta estoura o prazo e falha como qualquer erro de transporte."""

        async def slow(request: httpx.Request) -> httpx.Response:
            await anyio.sleep(1.0)
            return httpx.Response(200, json=upstream_payload())

        fetcher = ExchangeRateFetcher(URL, timeout=0.05, transport=httpx.MockTransport(slow))

        with pytest.raises(TransportError, match="deadline"):
            _fetch(fetcher)

    def test_connection_error_is_transport_error(self):
        """Falhas de rede viram TransportError."""

        def refuse(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        fetcher = ExchangeRateFetcher(URL, timeout=0.2, transport=httpx.MockTransport(refuse))

        with pytest.raises(TransportError):
            _fetch(fetcher)

    def test_invalid_url_is_request_construction_error(self):
        """URL inválida falha antes de enviar qualquer coisa."""
        fetcher = ExchangeRateFetcher("http://upstream.test:notaport/json", timeout=0.2, transport=json_transport(upstream_payload()))

        with pytest.raises(RequestConstructionError):
            _fetch(fetcher)
