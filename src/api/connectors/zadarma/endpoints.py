"""Wrappers de endpoints da API Zadarma v1.

ZadarmaApi compõe um ZadarmaHttpClient (não herda dele): cada método apenas
monta parâmetros e delega para ``call``. Assinatura, transporte e
classificação de erros ficam no cliente HTTP.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any, Literal

from .errors import InvalidParameterError
from .http_client import ApiResponse, ZadarmaHttpClient
from .numbers import filter_number, filter_params
from .rate_limits import RateLimitSnapshot

API_VERSION = "v1"

Verb = Literal["get", "post", "put", "delete"]
RecordingStatus = Literal["on", "off", "on_email", "off_email", "on_store", "off_store"]


class ZadarmaApi:
    """Fachada dos endpoints REST da Zadarma."""

    def __init__(self, client: ZadarmaHttpClient) -> None:
        self._client = client

    @property
    def client(self) -> ZadarmaHttpClient:
        return self._client

    @property
    def last_rate_limits(self) -> RateLimitSnapshot:
        """Último snapshot observado (pode estar defasado sob concorrência)."""
        return self._client.last_rate_limits

    async def request(
        self,
        method: str,
        params: dict[str, object] | None = None,
        verb: Verb = "get",
    ) -> dict[str, Any]:
        """Chama ``/v1/{method}/`` e retorna o payload JSON."""
        response = await self.request_raw(method, params, verb)
        return response.data

    async def request_raw(
        self,
        method: str,
        params: dict[str, object] | None = None,
        verb: Verb = "get",
    ) -> ApiResponse:
        """Como ``request``, mas retorna ApiResponse (status + rate limits)."""
        return await self._client.call(f"/{API_VERSION}/{method}/", params or {}, verb)

    # Info

    async def get_balance(self) -> dict[str, Any]:
        """Saldo do usuário."""
        return await self.request("info/balance")

    async def get_price(self, number: str, caller_id: str | None = None) -> dict[str, Any]:
        """Tarifa de chamada no plano atual."""
        params: dict[str, object] = {"number": filter_number(number)}
        if caller_id:
            params["caller_id"] = filter_number(caller_id)
        data = await self.request("info/price", params)
        return data["info"]

    async def get_timezone(self) -> dict[str, Any]:
        return await self.request("info/timezone")

    async def get_tariff(self) -> dict[str, Any]:
        data = await self.request("tariff")
        return data["info"]

    async def number_lookup(self, number: str) -> dict[str, Any]:
        data = await self.request(
            "info/number_lookup",
            {"numbers": filter_number(number)},
            "post",
        )
        return data["info"]

    async def number_lookup_multiple(self, numbers: Sequence[str]) -> None:
        """Lookup em lote; o resultado chega por webhook."""
        filtered = [filter_number(number) for number in numbers]
        await self.request("info/number_lookup", {"numbers": filtered}, "post")

    # Callback

    async def request_callback(
        self,
        from_: str,
        to: str,
        sip: str | None = None,
        predicted: bool = False,
    ) -> dict[str, Any]:
        """Solicita um CallBack.

        Args:
            from_: Número/SIP/ramal/cenário que recebe o CallBack
            to: Número chamado
            sip: SIP ou ramal usado na chamada
            predicted: Chamada preditiva (liga primeiro para ``to``)
        """
        params: dict[str, object] = {"from": from_, "to": filter_number(to)}
        if sip:
            params["sip"] = filter_number(sip)
        if predicted:
            params["predicted"] = predicted
        return await self.request("request/callback", params)

    # SIP

    async def get_sip(self) -> dict[str, Any]:
        return await self.request("sip")

    async def get_sip_status(self, sip_id: str) -> dict[str, Any]:
        return await self.request(f"sip/{filter_number(sip_id)}/status")

    async def get_sip_redirection(self, sip_id: str | None = None) -> list[dict[str, Any]]:
        params: dict[str, object] = {"id": filter_number(sip_id)} if sip_id else {}
        data = await self.request("sip/redirection", params)
        return data["info"]

    async def set_sip_caller_id(self, sip_id: str, number: str) -> dict[str, Any]:
        params: dict[str, object] = {
            "id": filter_number(sip_id),
            "number": filter_number(number),
        }
        return await self.request("sip/callerid", params, "put")

    async def set_sip_redirection_status(self, sip_id: str, status_on: bool) -> dict[str, Any]:
        params: dict[str, object] = {
            "id": filter_number(sip_id),
            "status": "on" if status_on else "off",
        }
        return await self.request("sip/redirection", params, "put")

    async def set_sip_redirection_number(self, sip_id: str, number: str) -> dict[str, Any]:
        params: dict[str, object] = {
            "id": filter_number(sip_id),
            "type": "phone",
            "number": filter_number(number),
        }
        return await self.request("sip/redirection", params, "put")

    async def get_direct_numbers(self) -> list[dict[str, Any]]:
        data = await self.request("direct_numbers")
        return data["info"]

    # PBX

    async def get_pbx_internal(self) -> dict[str, Any]:
        return await self.request("pbx/internal")

    async def get_pbx_status(self, pbx_id: str) -> dict[str, Any]:
        return await self.request(f"pbx/internal/{filter_number(pbx_id)}/status")

    async def get_pbx_info(self, pbx_id: str) -> dict[str, Any]:
        return await self.request(f"pbx/internal/{filter_number(pbx_id)}/info")

    async def get_pbx_record(
        self,
        call_id: str | None = None,
        pbx_call_id: str | None = None,
        lifetime: int | None = None,
    ) -> dict[str, Any]:
        """Link para gravação de chamada.

        Args:
            call_id: ID único da gravação
            pbx_call_id: ID permanente da chamada externa no PBX
            lifetime: Validade do link em segundos (180 a 5184000)

        Raises:
            InvalidParameterError: Se nenhum dos IDs for informado
        """
        if not call_id and not pbx_call_id:
            raise InvalidParameterError("call_id or pbx_call_id required")
        params = filter_params(
            {
                "call_id": call_id or None,
                "pbx_call_id": pbx_call_id or None,
                "lifetime": lifetime or None,
            }
        )
        return await self.request("pbx/record/request", params)

    async def get_pbx_redirection(self, pbx_number: str) -> dict[str, Any]:
        return await self.request("pbx/redirection", {"pbx_number": filter_number(pbx_number)})

    async def set_pbx_redirection_off(self, pbx_number: str) -> dict[str, Any]:
        params: dict[str, object] = {"pbx_number": filter_number(pbx_number), "status": "off"}
        return await self.request("pbx/redirection", params, "post")

    async def set_pbx_phone_redirection(
        self,
        pbx_number: str,
        destination: str,
        always: bool,
        set_caller_id: bool,
    ) -> dict[str, Any]:
        params: dict[str, object] = {
            "pbx_number": filter_number(pbx_number),
            "type": "phone",
            "condition": "always" if always else "noanswer",
            "destination": filter_number(destination),
            "set_caller_id": "on" if set_caller_id else "off",
        }
        return await self.request("pbx/redirection", params, "post")

    async def set_pbx_voicemail_redirection(
        self,
        pbx_number: str,
        destination: str,
        always: bool,
        greeting: Literal["no", "standart", "own"],
        greeting_file: object | None = None,
    ) -> dict[str, Any]:
        """Redirecionamento para voicemail.

        ``greeting_file`` só é enviado com ``greeting="own"``; valores
        não escalares vão no wire mas ficam fora da assinatura.
        """
        params: dict[str, object] = {
            "pbx_number": filter_number(pbx_number),
            "type": "voicemail",
            "condition": "always" if always else "noanswer",
            "destination": destination,
            "voicemail_greeting": greeting,
        }
        if greeting == "own" and greeting_file:
            params["greeting_file"] = greeting_file
        return await self.request("pbx/redirection", params, "post")

    async def set_pbx_recording(
        self,
        sip_id: str,
        status: RecordingStatus,
        email: str | None = None,
        speech_recognition: Literal["all", "optional", "off"] | None = None,
    ) -> dict[str, Any]:
        params: dict[str, object] = {"id": filter_number(sip_id), "status": status}
        if email:
            params["email"] = email
        if speech_recognition and status not in ("off", "off_store"):
            params["speech_recognition"] = speech_recognition
        return await self.request("pbx/internal/recording", params, "put")

    # Statistics

    async def get_statistics(
        self,
        start: str | None = None,
        end: str | None = None,
        sip: str | None = None,
        cost_only: bool | None = None,
        type: str | None = None,
        skip: int | None = None,
        limit: int | None = None,
    ) -> dict[str, Any]:
        """Estatística geral (período máximo de 1 mês, datas ``Y-m-d H:i:s``)."""
        params = filter_params(
            {
                "start": start,
                "end": end,
                "sip": filter_number(sip) if sip else None,
                "cost_only": cost_only,
                "type": type,
                "skip": skip,
                "limit": limit,
            }
        )
        return await self.request("statistics", params)

    async def get_pbx_statistics(
        self,
        start: str | None = None,
        end: str | None = None,
        new_format: bool = True,
        call_type: Literal["in", "out"] | None = None,
        skip: int | None = None,
        limit: int | None = None,
    ) -> dict[str, Any]:
        params = filter_params(
            {
                "start": start,
                "end": end,
                "version": 2 if new_format else 1,
                "skip": skip,
                "limit": limit,
                "call_type": call_type,
            }
        )
        return await self.request("statistics/pbx", params)

    async def get_callback_widget_statistics(
        self,
        start: str | None = None,
        end: str | None = None,
        widget_id: str | None = None,
    ) -> dict[str, Any]:
        params = filter_params({"start": start, "end": end, "widget_id": widget_id})
        return await self.request("statistics/callback_widget", params)

    async def get_incoming_call_statistics(
        self,
        start: str | None = None,
        end: str | None = None,
        sip: str | None = None,
        skip: int | None = None,
        limit: int | None = None,
    ) -> dict[str, Any]:
        params = filter_params(
            {
                "start": start,
                "end": end,
                "sip": filter_number(sip) if sip else None,
                "skip": skip,
                "limit": limit,
            }
        )
        return await self.request("statistics/incoming-calls", params)

    # SMS

    async def send_sms(
        self,
        to: str | Sequence[str],
        message: str,
        caller_id: str | None = None,
    ) -> dict[str, Any]:
        """Envia SMS para um ou mais números (separados por vírgula no wire)."""
        numbers = [to] if isinstance(to, str) else list(to)
        params: dict[str, object] = {
            "number": ",".join(filter_number(number) for number in numbers),
            "message": message,
        }
        if caller_id:
            params["caller_id"] = caller_id
        return await self.request("sms/send", params, "post")

    # Speech recognition

    async def start_speech_recognition(self, call_id: str, lang: str | None = None) -> bool:
        params: dict[str, object] = {"call_id": call_id}
        if lang:
            params["lang"] = lang
        data = await self.request("speech_recognition", params, "put")
        return data.get("status") == "success"

    async def get_speech_recognition_result(
        self,
        call_id: str,
        lang: str | None = None,
        return_words: bool = False,
        return_alternatives: bool = False,
    ) -> dict[str, Any]:
        params: dict[str, object] = {
            "call_id": call_id,
            "return": "words" if return_words else "phrases",
            "alternatives": 1 if return_alternatives else 0,
        }
        if lang:
            params["lang"] = lang
        return await self.request("speech_recognition", params)

    # WebRTC

    async def get_webrtc_key(self, sip_login: str) -> dict[str, Any]:
        return await self.request("webrtc/get_key", {"sip": sip_login})
