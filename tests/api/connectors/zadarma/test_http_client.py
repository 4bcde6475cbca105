"""Testes do transporte assinado (ZadarmaHttpClient)."""

from __future__ import annotations

from collections.abc import Callable
from urllib.parse import parse_qs

import httpx
import pytest

from api.connectors.zadarma.errors import (
    ApiRejectedError,
    ConfigurationError,
    HttpStatusError,
    TransportError,
)
from api.connectors.zadarma.http_client import (
    PROD_URL,
    SANDBOX_URL,
    ZadarmaHttpClient,
    normalize_verb,
)
from api.connectors.zadarma.signer import Credentials, sign_request

Handler = Callable[[httpx.Request], httpx.Response]


def _make_client(handler: Handler, *, sandbox: bool = False) -> ZadarmaHttpClient:
    transport = httpx.MockTransport(handler)
    return ZadarmaHttpClient(
        Credentials(api_key="KEY123", secret="secret1"),
        sandbox=sandbox,
        http_client=httpx.AsyncClient(transport=transport),
    )


class _Recorder:
    """Handler que registra requests e devolve uma resposta fixa."""

    def __init__(self, response: httpx.Response | None = None) -> None:
        self.requests: list[httpx.Request] = []
        self._response = response or httpx.Response(200, json={"status": "success"})

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self._response


class TestRequestShape:
    """Forma da requisição: URL, headers e corpo."""

    @pytest.mark.asyncio
    async def test_get_appends_query_and_signs(self) -> None:
        recorder = _Recorder()
        client = _make_client(recorder)

        await client.call("/v1/info/balance/")

        request = recorder.requests[0]
        assert request.method == "GET"
        assert str(request.url) == f"{PROD_URL}/v1/info/balance/?format=json"
        assert request.headers["Authorization"] == (
            "KEY123:NjczYmM1Y2VhYjE0NmY5ZWQ0YzM1ZmI5YTk1M2RmMzNhNWE2MjZkNA=="
        )
        assert "content-type" not in request.headers

    @pytest.mark.asyncio
    async def test_post_sends_form_body(self) -> None:
        recorder = _Recorder()
        client = _make_client(recorder)
        params = {"number": "79990000000", "message": "hi there"}

        await client.call("/v1/sms/send/", params, "post")

        request = recorder.requests[0]
        assert request.method == "POST"
        assert str(request.url) == f"{PROD_URL}/v1/sms/send/"
        assert request.headers["Content-Type"] == "application/x-www-form-urlencoded"
        assert request.content == b"number=79990000000&message=hi+there&format=json"
        assert request.headers["Authorization"] == sign_request(
            "/v1/sms/send/",
            {**params, "format": "json"},
            "KEY123",
            "secret1",
        )

    @pytest.mark.asyncio
    async def test_verb_is_case_insensitive(self) -> None:
        recorder = _Recorder()
        client = _make_client(recorder)

        await client.call("/v1/sip/callerid/", {"id": "1"}, "Put")

        assert recorder.requests[0].method == "PUT"

    @pytest.mark.asyncio
    async def test_invalid_verb_fails_before_network(self) -> None:
        recorder = _Recorder()
        client = _make_client(recorder)

        with pytest.raises(ConfigurationError):
            await client.call("/v1/info/balance/", verb="patch")
        assert recorder.requests == []

    def test_normalize_verb(self) -> None:
        assert normalize_verb("delete") == "DELETE"
        with pytest.raises(ConfigurationError):
            normalize_verb("")

    @pytest.mark.asyncio
    async def test_params_are_not_mutated(self) -> None:
        client = _make_client(_Recorder())
        params = {"number": "1"}

        await client.call("/v1/info/price/", params)

        assert params == {"number": "1"}

    @pytest.mark.asyncio
    async def test_object_params_sent_but_not_signed(self) -> None:
        recorder = _Recorder()
        client = _make_client(recorder)
        params = {"pbx_number": "100", "greeting_file": {"name": "hello.mp3"}}

        await client.call("/v1/pbx/redirection/", params, "post")

        request = recorder.requests[0]
        body = parse_qs(request.content.decode("ascii"))
        assert body["greeting_file[name]"] == ["hello.mp3"]
        assert request.headers["Authorization"] == sign_request(
            "/v1/pbx/redirection/",
            {"pbx_number": "100", "format": "json"},
            "KEY123",
            "secret1",
        )

    @pytest.mark.asyncio
    async def test_sandbox_origin(self) -> None:
        recorder = _Recorder()
        client = _make_client(recorder, sandbox=True)

        await client.call("/v1/info/balance/")

        assert str(recorder.requests[0].url).startswith(SANDBOX_URL)


class TestResponseHandling:
    """Classificação de respostas e telemetria."""

    @pytest.mark.asyncio
    async def test_success_returns_data_and_rate_limits(self) -> None:
        response = httpx.Response(
            200,
            json={"status": "success", "balance": 10.5},
            headers={"X-RateLimit-Minute": "58", "X-RateLimit-Limit": "100"},
        )
        client = _make_client(_Recorder(response))

        result = await client.call("/v1/info/balance/")

        assert result.data == {"status": "success", "balance": 10.5}
        assert result.status_code == 200
        assert result.rate_limits == {"minute": 58, "limit": 100}
        assert client.last_rate_limits == {"minute": 58, "limit": 100}
        assert client.last_status_code == 200

    @pytest.mark.asyncio
    async def test_rate_limit_snapshot_is_overwritten(self) -> None:
        responses = iter(
            [
                httpx.Response(200, json={"status": "success"}, headers={"X-RateLimit-Minute": "58"}),
                httpx.Response(200, json={"status": "success"}),
            ]
        )
        client = _make_client(lambda request: next(responses))

        await client.call("/v1/info/balance/")
        await client.call("/v1/info/balance/")

        assert client.last_rate_limits == {}

    @pytest.mark.asyncio
    async def test_http_error_uses_server_message(self) -> None:
        response = httpx.Response(401, json={"status": "error", "message": "Not authorized"})
        client = _make_client(_Recorder(response))

        with pytest.raises(HttpStatusError) as exc_info:
            await client.call("/v1/info/balance/")

        assert exc_info.value.message == "Not authorized"
        assert exc_info.value.status_code == 401
        assert client.last_status_code == 401

    @pytest.mark.asyncio
    async def test_http_error_without_json_uses_generic_message(self) -> None:
        client = _make_client(_Recorder(httpx.Response(502, text="<html>bad gateway</html>")))

        with pytest.raises(HttpStatusError, match="Unknown error"):
            await client.call("/v1/info/balance/")

    @pytest.mark.asyncio
    async def test_application_error_sentinel(self) -> None:
        response = httpx.Response(200, json={"status": "error", "message": "Wrong parameters"})
        client = _make_client(_Recorder(response))

        with pytest.raises(ApiRejectedError, match="Wrong parameters"):
            await client.call("/v1/info/price/", {"number": "1"})

    @pytest.mark.asyncio
    async def test_application_error_without_message(self) -> None:
        client = _make_client(_Recorder(httpx.Response(200, json={"status": "error"})))

        with pytest.raises(ApiRejectedError, match="Unknown error"):
            await client.call("/v1/info/balance/")

    @pytest.mark.asyncio
    async def test_connection_error_is_transport_error(self) -> None:
        def _fail(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        client = _make_client(_fail)

        with pytest.raises(TransportError) as exc_info:
            await client.call("/v1/info/balance/")

        assert isinstance(exc_info.value.__cause__, httpx.ConnectError)
        assert not isinstance(exc_info.value, HttpStatusError)

    @pytest.mark.asyncio
    async def test_invalid_json_on_success_fails_closed(self) -> None:
        client = _make_client(_Recorder(httpx.Response(200, text="not-json")))

        with pytest.raises(TransportError):
            await client.call("/v1/info/balance/")

    @pytest.mark.asyncio
    async def test_non_numeric_rate_limit_is_transport_error(self) -> None:
        response = httpx.Response(
            200,
            json={"status": "success"},
            headers={"X-RateLimit-Minute": "lots"},
        )
        client = _make_client(_Recorder(response))

        with pytest.raises(TransportError):
            await client.call("/v1/info/balance/")

    @pytest.mark.asyncio
    async def test_xml_format_returns_text(self) -> None:
        recorder = _Recorder(httpx.Response(200, text="<answer><status>success</status></answer>"))
        client = _make_client(recorder)

        result = await client.call("/v1/info/balance/", format="xml")

        assert result.data == "<answer><status>success</status></answer>"
        assert recorder.requests[0].url.params["format"] == "xml"
