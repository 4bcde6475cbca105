"""Sanitização de parâmetros de endpoints."""

from __future__ import annotations

import re
from collections.abc import Mapping

from .errors import InvalidParameterError

_NON_DIGIT = re.compile(r"\D")


def filter_number(number: object) -> str:
    """Mantém apenas dígitos do número.

    Raises:
        InvalidParameterError: Se não restar nenhum dígito
    """
    filtered = _NON_DIGIT.sub("", str(number))
    if not filtered:
        raise InvalidParameterError("Wrong number format.")
    return filtered


def filter_params(params: Mapping[str, object]) -> dict[str, object]:
    """Remove parâmetros com valor None."""
    return {key: value for key, value in params.items() if value is not None}
