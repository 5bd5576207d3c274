"""
SQLAlchemy-backed credential store
"""
import logging
from datetime import datetime
from typing import List, Optional

from sqlalchemy import and_
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from ..models import OTPChallenge, PasskeyBinding, OAuthToken, Application, MtpServer
from .base import CredentialStore

logger = logging.getLogger(__name__)


class SqlCredentialStore(CredentialStore):
    def __init__(self, db: Session):
        self.db = db

    def _commit(self) -> None:
        try:
            self.db.commit()
        except SQLAlchemyError as e:
            logger.error(f"[DB] Commit failed, rolling back: {e}")
            self.db.rollback()
            raise

    def replace_challenge(self, challenge: OTPChallenge) -> OTPChallenge:
        # Delete and insert share one transaction so no reader sees a gap
        self.db.query(OTPChallenge).filter(
            OTPChallenge.phone == challenge.phone
        ).delete()
        self.db.add(challenge)
        self._commit()
        self.db.refresh(challenge)
        return challenge

    def find_open_challenge(self, phone: str, code: str, flow_token: str) -> Optional[OTPChallenge]:
        return self.db.query(OTPChallenge).filter(
            and_(
                OTPChallenge.phone == phone,
                OTPChallenge.code == code,
                OTPChallenge.flow_token == flow_token,
                OTPChallenge.used == False,  # noqa: E712
            )
        ).first()

    def mark_challenge_used(self, challenge: OTPChallenge) -> bool:
        # Ids of deleted rows can be reused, so match the full challenge key
        updated = self.db.query(OTPChallenge).filter(
            and_(
                OTPChallenge.id == challenge.id,
                OTPChallenge.phone == challenge.phone,
                OTPChallenge.code == challenge.code,
                OTPChallenge.flow_token == challenge.flow_token,
                OTPChallenge.used == False,  # noqa: E712
            )
        ).update({OTPChallenge.used: True}, synchronize_session=False)
        self._commit()
        if updated != 1:
            return False
        self.db.refresh(challenge)
        return True

    def latest_used_challenge(self, phone: str) -> Optional[OTPChallenge]:
        return self.db.query(OTPChallenge).filter(
            OTPChallenge.phone == phone,
            OTPChallenge.used == True,  # noqa: E712
        ).order_by(OTPChallenge.expires_at.desc()).first()

    def upsert_binding(self, phone: str, credential_id: str, created_at: datetime) -> PasskeyBinding:
        binding = self.db.get(PasskeyBinding, phone)
        if binding is None:
            binding = PasskeyBinding(phone=phone, credential_id=credential_id, created_at=created_at)
            self.db.add(binding)
            try:
                self.db.commit()
                self.db.refresh(binding)
                return binding
            except IntegrityError:
                # Bound by a concurrent request since the lookup; update that row instead
                self.db.rollback()
                logger.info("[DB] Passkey binding created concurrently, updating it")
                binding = self.db.query(PasskeyBinding).filter(PasskeyBinding.phone == phone).first()
        binding.credential_id = credential_id
        binding.created_at = created_at
        self._commit()
        self.db.refresh(binding)
        return binding

    def get_binding(self, phone: str) -> Optional[PasskeyBinding]:
        return self.db.get(PasskeyBinding, phone)

    def add_token(self, token: OAuthToken) -> OAuthToken:
        self.db.add(token)
        self._commit()
        self.db.refresh(token)
        return token

    def list_tokens(self, phone: str) -> List[OAuthToken]:
        return self.db.query(OAuthToken).filter(
            OAuthToken.phone == phone
        ).order_by(OAuthToken.issued_at.desc(), OAuthToken.id.desc()).all()

    def find_active_token(self, access_token: str) -> Optional[OAuthToken]:
        return self.db.query(OAuthToken).filter(
            OAuthToken.access_token == access_token,
            OAuthToken.revoked == False,  # noqa: E712
        ).first()

    def revoke_token(self, token: OAuthToken, revoked_at: datetime) -> bool:
        updated = self.db.query(OAuthToken).filter(
            OAuthToken.id == token.id,
            OAuthToken.access_token == token.access_token,
            OAuthToken.revoked == False,  # noqa: E712
        ).update(
            {OAuthToken.revoked: True, OAuthToken.revoked_at: revoked_at},
            synchronize_session=False,
        )
        self._commit()
        self.db.refresh(token)
        return updated == 1

    def add_application(self, application: Application) -> Application:
        self.db.add(application)
        self._commit()
        self.db.refresh(application)
        return application

    def list_applications(self) -> List[Application]:
        return self.db.query(Application).order_by(
            Application.created_at.desc(), Application.id.desc()
        ).all()

    def add_mtp_server(self, server: MtpServer) -> MtpServer:
        self.db.add(server)
        self._commit()
        self.db.refresh(server)
        return server

    def list_mtp_servers(self) -> List[MtpServer]:
        return self.db.query(MtpServer).order_by(
            MtpServer.created_at.desc(), MtpServer.id.desc()
        ).all()
