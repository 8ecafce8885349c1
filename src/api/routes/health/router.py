"""Endpoints de health check para Cloud Run."""

from __future__ import annotations

import asyncio
import logging
import time
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Any, Literal

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from config.settings import get_access_settings

logger = logging.getLogger(__name__)

router = APIRouter()

SERVICE_NAME = "gestao-usuarios"
HEALTH_COLLECTION = "_health"


class HealthResponse(BaseModel):
    """Resposta do health check."""

    status: str
    service: str
    timestamp: str
    version: str = "1.0.0"


@dataclass(frozen=True, slots=True)
class DependencyCheck:
    """Resultado de checagem de dependência."""

    status: Literal["ok", "degraded", "failed"]
    latency_ms: float | None = None
    error: str | None = None

    def as_dict(self) -> dict[str, Any]:
        return {
            "status": self.status,
            "latency_ms": self.latency_ms,
            "error": self.error,
        }


@router.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Liveness probe — verifica se o serviço está rodando."""
    return HealthResponse(
        status="healthy",
        service=SERVICE_NAME,
        timestamp=datetime.now(UTC).isoformat(),
    )


@router.get("/ready")
async def readiness_check(request: Request) -> JSONResponse:
    """Readiness probe: profile store e provedor de identidade."""
    settings = get_access_settings()
    state = request.app.state

    if settings.profile_store_backend == "memory":
        profile_check = DependencyCheck(status="ok", error="memory_backend")
    else:
        profile_check = await _check_firestore(getattr(state, "firestore_client", None))

    if settings.identity_backend == "memory":
        identity_check = DependencyCheck(status="ok", error="memory_backend")
    else:
        identity_check = _check_firebase_app(getattr(state, "firebase_app", None))

    ready = profile_check.status in {"ok", "degraded"} and identity_check.status == "ok"

    payload = {
        "status": "ready" if ready else "not_ready",
        "checks": {
            "profile_store": profile_check.as_dict(),
            "identity_provider": identity_check.as_dict(),
        },
        "timestamp": datetime.now(UTC).isoformat(),
    }
    return JSONResponse(content=payload, status_code=200 if ready else 503)


async def _check_firestore(firestore_client: Any | None) -> DependencyCheck:
    if firestore_client is None:
        return DependencyCheck(status="failed", error="not_configured")
    started_at = time.perf_counter()
    try:
        exists = await asyncio.wait_for(
            asyncio.to_thread(_read_firestore_health_doc, firestore_client),
            timeout=3.0,
        )
    except TimeoutError:
        return DependencyCheck(status="failed", error="timeout")
    except Exception as exc:
        return DependencyCheck(status="failed", error=type(exc).__name__)
    latency_ms = (time.perf_counter() - started_at) * 1000
    status = "ok" if exists else "degraded"
    return DependencyCheck(status=status, latency_ms=round(latency_ms, 2))


def _read_firestore_health_doc(firestore_client: Any) -> bool:
    doc = firestore_client.collection(HEALTH_COLLECTION).document("check").get()
    return bool(getattr(doc, "exists", False))


def _check_firebase_app(firebase_app: Any | None) -> DependencyCheck:
    # Sem chamada remota: o SDK só valida credenciais no primeiro uso
    if firebase_app is None:
        return DependencyCheck(status="failed", error="not_configured")
    return DependencyCheck(status="ok")
