"""
Application and MTP server registries (insert + list only)
"""
import logging
from typing import List, Optional

from ..core.errors import InvalidInput
from ..models import Application, MtpServer
from ..repositories import CredentialStore
from ..utils.time import utcnow

logger = logging.getLogger(__name__)


def _required(value: Optional[str], message: str) -> str:
    value = (value or "").strip()
    if not value:
        raise InvalidInput(message)
    return value


class RegistryService:

    @staticmethod
    def create_application(store: CredentialStore, name: str, description: Optional[str] = None) -> Application:
        application = store.add_application(Application(
            name=_required(name, "Application name is required."),
            description=(description or "").strip() or None,
            created_at=utcnow(),
        ))
        logger.info(f"[Registry] Application {application.id} created")
        return application

    @staticmethod
    def list_applications(store: CredentialStore) -> List[Application]:
        return store.list_applications()

    @staticmethod
    def create_mtp_server(store: CredentialStore, name: str, url: str) -> MtpServer:
        server = store.add_mtp_server(MtpServer(
            name=_required(name, "Server name is required."),
            url=_required(url, "Server url is required."),
            created_at=utcnow(),
        ))
        logger.info(f"[Registry] MTP server {server.id} created")
        return server

    @staticmethod
    def list_mtp_servers(store: CredentialStore) -> List[MtpServer]:
        return store.list_mtp_servers()
