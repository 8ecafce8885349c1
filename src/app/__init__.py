"""App — coração do sistema: orquestração, casos de uso e infraestrutura.

Subpastas:
- bootstrap/: composition root (factories, inicialização, wiring)
- domain/: modelos de usuário, requests e resultado das operações
- use_cases/: casos de uso (ciclo de vida de usuário)
- services/: guard de autorização, validação, tradução de erros
- infra/: implementações concretas de IO (Firebase Auth, Firestore, memória)
- protocols/: contratos/interfaces
- observability/: correlation_id e métricas via logs

Padrão: app executa; api adapta; config configura; utils apoia.
"""
