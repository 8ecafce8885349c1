"""API — camada de borda HTTP.

Responsabilidades:
- Receber requests (variante HTTP e variante chamável)
- Ler o envelope `{"data": {...}}` e o header Authorization
- Traduzir UserOperationResult em resposta HTTP

Subpastas:
- routes/: endpoints HTTP (usuários, health)

NÃO PODE conter: regras de autorização, sequenciamento de escritas.
"""
