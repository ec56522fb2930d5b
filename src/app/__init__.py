"""App — coração do sistema: orquestração, casos de uso e infraestrutura.

Subpastas:
- bootstrap/: composition root (factories, inicialização, wiring)
- use_cases/: handlers de status de pedido (dispatcher e cenários)
- domain/: modelos de pedido, assinatura, contrato e falha
- services/: throttle, lotes e registro de falhas
- infra/: clientes HTTP e stores concretos
- protocols/: contratos/interfaces
- observability/: correlation id por evento e métricas via logs

Padrão: app executa; api adapta; config configura; utils apoia.
"""
