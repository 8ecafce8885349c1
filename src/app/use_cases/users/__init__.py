"""Use cases de gestão de usuários (identidade + perfil)."""

from app.use_cases.users.account_sequencer import UserAccountSequencer
from app.use_cases.users.lifecycle_orchestrator import UserLifecycleOrchestrator

__all__ = [
    "UserAccountSequencer",
    "UserLifecycleOrchestrator",
]
