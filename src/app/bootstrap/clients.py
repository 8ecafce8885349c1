"""Factories de clientes externos — Firestore e Firebase Admin.

Criados uma vez por processo e somente leitura depois disso; o core
recebe as instâncias por injeção, nunca importa daqui.
"""

from __future__ import annotations

import logging
from functools import lru_cache
from typing import TYPE_CHECKING

from config.settings import get_base_settings, get_firestore_settings

if TYPE_CHECKING:
    import firebase_admin
    from google.cloud.firestore import Client as FirestoreClient

logger = logging.getLogger(__name__)


def _project_id() -> str | None:
    return get_firestore_settings().project_id or get_base_settings().gcp_project or None


@lru_cache(maxsize=1)
def create_firestore_client() -> FirestoreClient:
    """Cria cliente Firestore (singleton).

    Returns:
        Cliente Firestore
    """
    from google.cloud import firestore

    project_id = _project_id()
    client = firestore.Client(project=project_id)
    logger.info("firestore_client_created", extra={"project": project_id})
    return client


@lru_cache(maxsize=1)
def create_firebase_app() -> firebase_admin.App:
    """Inicializa o app padrão do Firebase Admin (singleton).

    Usa Application Default Credentials (GOOGLE_APPLICATION_CREDENTIALS ou
    a service account do runtime).
    """
    import firebase_admin

    try:
        app = firebase_admin.get_app()
    except ValueError:
        project_id = _project_id()
        options = {"projectId": project_id} if project_id else None
        app = firebase_admin.initialize_app(options=options)
        logger.info("firebase_app_initialized", extra={"project": project_id})
    return app
