"""API — camada de borda e adapters externos.

Responsabilidades:
- Assinar e enviar chamadas para a API Zadarma
- Receber webhooks e validar assinaturas
- Classificar falhas de transporte, HTTP e aplicação

Subpastas:
- connectors/: adapters HTTP por provedor
- routes/: endpoints HTTP (webhooks, health)
"""
