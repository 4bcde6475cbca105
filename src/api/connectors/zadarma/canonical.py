"""Codificação canônica de parâmetros (wire e assinatura).

A mesma função gera o payload enviado (query string em GET, corpo em
POST/PUT/DELETE) e a base de assinatura. Regras:

1. Pares ``key=value`` unidos por ``&`` na ordem de iteração do mapping.
2. Form encoding do serializer WHATWG (URLSearchParams): espaço vira ``+``,
   ``*`` fica literal e ``~`` vira ``%7E``. Floats inteiros saem sem ``.0``.
3. Arrays viram entradas repetidas ``key=value``, na ordem do array.
4. Booleanos viram ``true``/``false``; ``None`` é omitido.
5. Mappings aninhados só existem no wire (``key[sub]=value``) e nunca
   participam da assinatura.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from urllib.parse import quote_plus, urlencode

Scalar = str | int | float | bool

_SCALAR_TYPES = (str, int, float, bool)


def _render_scalar(value: Scalar) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def _form_quote(
    value: str,
    safe: str = "",
    encoding: str | None = None,
    errors: str | None = None,
) -> str:
    # quote_plus difere do form serializer só em "*" e "~"
    return quote_plus(value, safe="*", encoding=encoding, errors=errors).replace("~", "%7E")


def _iter_pairs(key: str, value: object) -> Iterator[tuple[str, str]]:
    if value is None:
        return
    if isinstance(value, Mapping):
        for sub_key, sub_value in value.items():
            yield from _iter_pairs(f"{key}[{sub_key}]", sub_value)
        return
    if isinstance(value, (list, tuple)):
        for index, item in enumerate(value):
            if isinstance(item, (Mapping, list, tuple)):
                yield from _iter_pairs(f"{key}[{index}]", item)
            elif item is not None:
                yield key, _render_scalar(item)
        return
    yield key, _render_scalar(value)  # type: ignore[arg-type]


def build_query(params: Mapping[str, object]) -> str:
    """Codifica parâmetros como query string canônica.

    Args:
        params: Mapping de parâmetros (ordem de iteração preservada)

    Returns:
        String ``key=value&...`` com espaços como ``+``; vazia se sem pares.
    """
    pairs: list[tuple[str, str]] = []
    for key, value in params.items():
        pairs.extend(_iter_pairs(str(key), value))
    return urlencode(pairs, quote_via=_form_quote)


def _is_signable(value: object) -> bool:
    if value is None:
        return False
    if isinstance(value, _SCALAR_TYPES):
        return True
    if isinstance(value, (list, tuple)):
        return all(isinstance(item, _SCALAR_TYPES) for item in value)
    return False


def signable_params(params: Mapping[str, object]) -> dict[str, object]:
    """Filtra apenas escalares e arrays de escalares."""
    return {str(key): value for key, value in params.items() if _is_signable(value)}


def build_signing_query(params: Mapping[str, object]) -> str:
    """Query canônica da base de assinatura: filtrada e ordenada por chave."""
    filtered = signable_params(params)
    ordered = dict(sorted(filtered.items(), key=lambda item: item[0]))
    return build_query(ordered)
