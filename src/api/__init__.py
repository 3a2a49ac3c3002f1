"""API — camada de borda do gateway.

Responsabilidades:
- Receber interações assinadas e o webhook interno de presets
- Validar tamanho, assinaturas e payloads
- Falar com APIs externas (Discord REST, API de presets)

Subpastas:
- connectors/: adapters HTTP e verificação de requests
- routes/: endpoints HTTP (interações, webhooks, health)

NÃO PODE conter: regras de roteamento de comandos nem lógica de handlers.
"""
