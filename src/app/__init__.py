"""App — coração do gateway: orquestração, domínio e infraestrutura.

Subpastas:
- bootstrap/: composition root (factories, inicialização, wiring)
- coordinators/: dispatcher de interações, handlers e follow-ups
- domain/: envelope de interação, respostas, deadlines, rate limit, presets
- services/: serviços de aplicação (resolução de idioma)
- infra/: implementações concretas de IO (crypto, stores, tasks)
- protocols/: contratos/interfaces
- observability/: correlation_id e métricas via logs

Padrão: app executa; api adapta; utils apoia.
"""
