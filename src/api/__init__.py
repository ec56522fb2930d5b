"""API — camada de borda HTTP.

Responsabilidades:
- Receber eventos de status de pedido
- Validar payloads de entrada
- Expor health/readiness

NÃO PODE conter: regras de reconciliação ou chamadas a sistemas externos.
"""
