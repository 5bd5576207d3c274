"""
In-memory credential store.

Holds detached model instances in plain lists and dicts, with the same
ordering and replacement rules as the SQL store. Used by unit tests and
local experiments; state is lost with the process.
"""
import itertools
import threading
from datetime import datetime
from typing import Dict, List, Optional

from ..models import OTPChallenge, PasskeyBinding, OAuthToken, Application, MtpServer
from .base import CredentialStore


class InMemoryCredentialStore(CredentialStore):
    def __init__(self):
        self._lock = threading.Lock()
        self._ids = itertools.count(1)
        self.challenges: List[OTPChallenge] = []
        self.bindings: Dict[str, PasskeyBinding] = {}
        self.tokens: List[OAuthToken] = []
        self.applications: List[Application] = []
        self.mtp_servers: List[MtpServer] = []

    def _next_id(self) -> int:
        return next(self._ids)

    def replace_challenge(self, challenge: OTPChallenge) -> OTPChallenge:
        with self._lock:
            self.challenges = [c for c in self.challenges if c.phone != challenge.phone]
            challenge.id = self._next_id()
            self.challenges.append(challenge)
        return challenge

    def find_open_challenge(self, phone: str, code: str, flow_token: str) -> Optional[OTPChallenge]:
        for challenge in self.challenges:
            if (
                challenge.phone == phone
                and challenge.code == code
                and challenge.flow_token == flow_token
                and not challenge.used
            ):
                return challenge
        return None

    def mark_challenge_used(self, challenge: OTPChallenge) -> bool:
        with self._lock:
            if challenge.used or challenge not in self.challenges:
                return False
            challenge.used = True
        return True

    def latest_used_challenge(self, phone: str) -> Optional[OTPChallenge]:
        used = [c for c in self.challenges if c.phone == phone and c.used]
        if not used:
            return None
        return max(used, key=lambda c: c.expires_at)

    def upsert_binding(self, phone: str, credential_id: str, created_at: datetime) -> PasskeyBinding:
        binding = PasskeyBinding(phone=phone, credential_id=credential_id, created_at=created_at)
        with self._lock:
            self.bindings[phone] = binding
        return binding

    def get_binding(self, phone: str) -> Optional[PasskeyBinding]:
        return self.bindings.get(phone)

    def add_token(self, token: OAuthToken) -> OAuthToken:
        with self._lock:
            token.id = self._next_id()
            self.tokens.append(token)
        return token

    def list_tokens(self, phone: str) -> List[OAuthToken]:
        tokens = [t for t in self.tokens if t.phone == phone]
        return sorted(tokens, key=lambda t: (t.issued_at, t.id), reverse=True)

    def find_active_token(self, access_token: str) -> Optional[OAuthToken]:
        for token in self.tokens:
            if token.access_token == access_token and not token.revoked:
                return token
        return None

    def revoke_token(self, token: OAuthToken, revoked_at: datetime) -> bool:
        with self._lock:
            if token.revoked:
                return False
            token.revoked = True
            token.revoked_at = revoked_at
        return True

    def add_application(self, application: Application) -> Application:
        with self._lock:
            application.id = self._next_id()
            self.applications.append(application)
        return application

    def list_applications(self) -> List[Application]:
        return sorted(self.applications, key=lambda a: (a.created_at, a.id), reverse=True)

    def add_mtp_server(self, server: MtpServer) -> MtpServer:
        with self._lock:
            server.id = self._next_id()
            self.mtp_servers.append(server)
        return server

    def list_mtp_servers(self) -> List[MtpServer]:
        return sorted(self.mtp_servers, key=lambda s: (s.created_at, s.id), reverse=True)
