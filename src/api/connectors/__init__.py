"""Connectors — adapters de borda para APIs externas.

Estrutura:
- discord/: endpoint de interações e Discord REST API
- presets/: API de presets da comunidade
- http_base: cliente HTTP com retry/backoff compartilhado

Cada connector isola seu IO, garantindo SRP e isolamento de falhas.
"""

__all__: list[str] = []
