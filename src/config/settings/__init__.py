"""Agregador de settings do conector Zadarma.

Re-exporta todas as settings e funções de cada módulo.
Organização por domínio para isolamento de mudanças.
"""

from __future__ import annotations

# Base settings
from config.settings.base import (
    DEFAULT_SERVICE_NAME,
    BaseSettings,
    Environment,
    get_base_settings,
)

# Channel-specific settings
from config.settings.zadarma import (
    ZadarmaSettings,
    get_zadarma_settings,
)

__all__ = [
    # Constants
    "DEFAULT_SERVICE_NAME",
    # Base
    "BaseSettings",
    "Environment",
    # Channels
    "ZadarmaSettings",
    "get_base_settings",
    "get_zadarma_settings",
]
