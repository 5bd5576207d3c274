"""
Unit tests for OTP challenges: issuance, supersession, verification, expiry
"""
import re
import pytest
from datetime import datetime, timedelta
from freezegun import freeze_time

from app.core.errors import InvalidInput, ChallengeNotFound, Expired, NotFound
from app.services.otp_service import OTPService


def test_generate_otp_code_is_six_digits():
    for _ in range(200):
        code = OTPService.generate_otp_code()
        assert re.fullmatch(r"\d{6}", code)


def test_generate_otp_code_keeps_leading_zeros(monkeypatch):
    monkeypatch.setattr("app.services.otp_service.secrets.randbelow", lambda n: 42)
    assert OTPService.generate_otp_code() == "000042"


@freeze_time("2026-01-10 12:00:00")
def test_issue_challenge_sets_sixty_second_expiry(store, phone):
    challenge = OTPService.issue_challenge(store, phone)

    assert challenge.phone == phone
    assert re.fullmatch(r"\d{6}", challenge.code)
    assert challenge.flow_token
    assert challenge.used is False
    assert challenge.expires_at == datetime(2026, 1, 10, 12, 1, 0)


@pytest.mark.parametrize("blank", ["", "   ", None])
def test_issue_challenge_rejects_blank_phone(store, blank):
    with pytest.raises(InvalidInput):
        OTPService.issue_challenge(store, blank)


def test_issue_challenge_trims_phone(store):
    challenge = OTPService.issue_challenge(store, "  demo-phone  ")
    assert challenge.phone == "demo-phone"


def test_flow_tokens_are_unique(store, phone):
    first = OTPService.issue_challenge(store, phone)
    second = OTPService.issue_challenge(store, phone)
    assert first.flow_token != second.flow_token


def test_new_challenge_supersedes_previous_one(store, phone):
    old = OTPService.issue_challenge(store, phone)
    old_code, old_flow = old.code, old.flow_token
    new = OTPService.issue_challenge(store, phone)

    with pytest.raises(ChallengeNotFound):
        OTPService.verify_challenge(store, phone, old_code, old_flow)

    assert OTPService.verify_challenge(store, phone, new.code, new.flow_token) == phone


def test_resend_between_lookup_and_consume_rejects_old_code(store, phone, monkeypatch):
    old = OTPService.issue_challenge(store, phone)
    old_code, old_flow = old.code, old.flow_token
    lookup = store.find_open_challenge
    resent = []

    def lookup_then_resend(*args):
        found = lookup(*args)
        resent.append(OTPService.issue_challenge(store, phone))
        return found

    monkeypatch.setattr(store, "find_open_challenge", lookup_then_resend)
    with pytest.raises(ChallengeNotFound):
        OTPService.verify_challenge(store, phone, old_code, old_flow)
    monkeypatch.undo()

    new = resent[0]
    assert new.used is False
    assert store.latest_used_challenge(phone) is None
    assert OTPService.verify_challenge(store, phone, new.code, new.flow_token) == phone


def test_new_challenge_for_other_phone_leaves_first_alone(store, phone):
    first = OTPService.issue_challenge(store, phone)
    OTPService.issue_challenge(store, "+5511988887777")

    assert OTPService.verify_challenge(store, phone, first.code, first.flow_token) == phone


def test_verify_marks_challenge_used_and_is_single_use(store, phone):
    challenge = OTPService.issue_challenge(store, phone)
    code, flow_token = challenge.code, challenge.flow_token

    OTPService.verify_challenge(store, phone, code, flow_token)
    assert store.latest_used_challenge(phone) is not None

    with pytest.raises(ChallengeNotFound):
        OTPService.verify_challenge(store, phone, code, flow_token)


def test_verify_wrong_code_and_wrong_flow_token_look_the_same(store, phone):
    challenge = OTPService.issue_challenge(store, phone)
    wrong_code = "000000" if challenge.code != "000000" else "111111"

    with pytest.raises(ChallengeNotFound) as wrong_code_exc:
        OTPService.verify_challenge(store, phone, wrong_code, challenge.flow_token)
    with pytest.raises(ChallengeNotFound) as wrong_flow_exc:
        OTPService.verify_challenge(store, phone, challenge.code, "not-the-flow-token")
    with pytest.raises(ChallengeNotFound) as no_challenge_exc:
        OTPService.verify_challenge(store, "+5511900000000", challenge.code, challenge.flow_token)

    assert wrong_code_exc.value.detail == wrong_flow_exc.value.detail == no_challenge_exc.value.detail
    # A failed attempt does not consume the challenge
    assert OTPService.verify_challenge(store, phone, challenge.code, challenge.flow_token) == phone


def test_challenge_not_found_is_a_not_found_reported_as_400():
    assert issubclass(ChallengeNotFound, NotFound)
    assert ChallengeNotFound.status_code == 400
    assert ChallengeNotFound.kind == "NotFound"


def test_verify_at_exact_expiry_succeeds(store, phone):
    with freeze_time("2026-01-10 12:00:00") as frozen:
        challenge = OTPService.issue_challenge(store, phone)
        frozen.tick(timedelta(seconds=60))
        assert OTPService.verify_challenge(store, phone, challenge.code, challenge.flow_token) == phone


def test_verify_after_expiry_fails_and_leaves_challenge_unused(store, phone):
    with freeze_time("2026-01-10 12:00:00") as frozen:
        challenge = OTPService.issue_challenge(store, phone)
        code, flow_token = challenge.code, challenge.flow_token
        frozen.tick(timedelta(seconds=61))

        with pytest.raises(Expired) as exc:
            OTPService.verify_challenge(store, phone, code, flow_token)
        assert "expired" in exc.value.detail.lower()

        # Still rejectable, never retroactively approvable
        with pytest.raises(Expired):
            OTPService.verify_challenge(store, phone, code, flow_token)
        assert store.latest_used_challenge(phone) is None


def test_issuing_a_challenge_keeps_bindings_and_tokens(store, phone):
    from app.services.passkey_service import PasskeyService
    from app.services.token_service import TokenService

    challenge = OTPService.issue_challenge(store, phone)
    OTPService.verify_challenge(store, phone, challenge.code, challenge.flow_token)
    PasskeyService.register_binding(store, phone, "cred-1")
    TokenService.issue_tokens(store, phone, "cred-1")

    OTPService.issue_challenge(store, phone)

    assert store.get_binding(phone).credential_id == "cred-1"
    assert len(store.list_tokens(phone)) == 1


def test_issue_challenge_writes_audit_line(store, phone, caplog):
    import logging

    with caplog.at_level(logging.INFO, logger="app.services.audit"):
        challenge = OTPService.issue_challenge(store, phone)

    audit_lines = [r.getMessage() for r in caplog.records if "[Audit]" in r.getMessage()]
    assert any("otp_challenge_issued" in line for line in audit_lines)
    # Codes and full phone numbers never reach the audit trail
    assert not any(challenge.code in line or phone in line for line in audit_lines)
