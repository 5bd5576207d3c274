"""
Abstract credential store.

Services talk to this interface only. Every mutating method is a single
atomic step: it either fully applies or raises.
"""
from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Optional

from ..models import OTPChallenge, PasskeyBinding, OAuthToken, Application, MtpServer


class CredentialStore(ABC):
    """Five typed tables: challenges, bindings, tokens, applications, servers"""

    # OTP challenges

    @abstractmethod
    def replace_challenge(self, challenge: OTPChallenge) -> OTPChallenge:
        """Delete every challenge for challenge.phone and insert this one, atomically."""

    @abstractmethod
    def find_open_challenge(self, phone: str, code: str, flow_token: str) -> Optional[OTPChallenge]:
        """Challenge matching all three fields with used = false."""

    @abstractmethod
    def mark_challenge_used(self, challenge: OTPChallenge) -> bool:
        """
        Flip used to true if it is still false.

        Returns:
            False if another request consumed the challenge first
        """

    @abstractmethod
    def latest_used_challenge(self, phone: str) -> Optional[OTPChallenge]:
        """Used challenge for phone with the latest expires_at."""

    # Passkey bindings

    @abstractmethod
    def upsert_binding(self, phone: str, credential_id: str, created_at: datetime) -> PasskeyBinding:
        pass

    @abstractmethod
    def get_binding(self, phone: str) -> Optional[PasskeyBinding]:
        pass

    # OAuth tokens

    @abstractmethod
    def add_token(self, token: OAuthToken) -> OAuthToken:
        pass

    @abstractmethod
    def list_tokens(self, phone: str) -> List[OAuthToken]:
        """All tokens for phone, newest first."""

    @abstractmethod
    def find_active_token(self, access_token: str) -> Optional[OAuthToken]:
        pass

    @abstractmethod
    def revoke_token(self, token: OAuthToken, revoked_at: datetime) -> bool:
        """
        Flag token as revoked if it is still active.

        Returns:
            False if the token was already revoked
        """

    # Registries

    @abstractmethod
    def add_application(self, application: Application) -> Application:
        pass

    @abstractmethod
    def list_applications(self) -> List[Application]:
        """Newest first."""

    @abstractmethod
    def add_mtp_server(self, server: MtpServer) -> MtpServer:
        pass

    @abstractmethod
    def list_mtp_servers(self) -> List[MtpServer]:
        """Newest first."""
