"""Camada de aplicação — bootstrap, observabilidade e entrypoint ASGI."""
