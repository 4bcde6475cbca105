"""Connectors por provedor — adapters de borda para APIs externas.

Estrutura:
- zadarma/: API de telefonia Zadarma (REST v1 + webhooks)
"""

__all__: list[str] = []
