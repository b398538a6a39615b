from datetime import datetime, timedelta, timezone

import pytest
from sqlalchemy.exc import OperationalError

from emprecords.core.exceptions import (
    InvalidCredentialsError,
    InvalidOrExpiredTokenError,
    UserNotFoundError,
    WriteFailedError,
)
from emprecords.main import cleanup_expired_reset_tokens_job
from emprecords.models import PasswordResetToken
from emprecords.repositories import UserRepository
from emprecords.services import (
    consume_reset_token,
    purge_expired_reset_tokens,
    register_user,
    request_reset_token,
    verify_credentials,
)

T0 = datetime(2026, 3, 1, 12, 0, 0, tzinfo=timezone.utc)


@pytest.fixture
def user(db):
    return register_user(db, "alice", "9876543210", "Passw0rd!")


def test_request_requires_name_and_phone_match(db, user):
    with pytest.raises(UserNotFoundError):
        request_reset_token(db, "alice", "0000000000", now=T0)
    with pytest.raises(UserNotFoundError):
        request_reset_token(db, "bob", "9876543210", now=T0)

    assert db.query(PasswordResetToken).count() == 0


def test_token_is_256_bit_hex(db, user):
    token = request_reset_token(db, "alice", "9876543210", now=T0)

    assert len(token) == 64
    int(token, 16)

    stored = db.query(PasswordResetToken).one()
    assert stored.prt_user_id == user.user_id
    assert stored.prt_expires_at.replace(tzinfo=timezone.utc) == T0 + timedelta(minutes=10)


def test_consume_succeeds_exactly_once(db, user):
    token = request_reset_token(db, "alice", "9876543210", now=T0)

    consume_reset_token(db, token, "NewPass1!", now=T0 + timedelta(minutes=1))
    verify_credentials(db, "alice", "NewPass1!")
    with pytest.raises(InvalidCredentialsError):
        verify_credentials(db, "alice", "Passw0rd!")

    with pytest.raises(InvalidOrExpiredTokenError):
        consume_reset_token(db, token, "Another1!", now=T0 + timedelta(minutes=2))
    verify_credentials(db, "alice", "NewPass1!")


def test_expired_token_rejected(db, user):
    token = request_reset_token(db, "alice", "9876543210", now=T0)

    with pytest.raises(InvalidOrExpiredTokenError):
        consume_reset_token(db, token, "NewPass1!", now=T0 + timedelta(minutes=10))

    verify_credentials(db, "alice", "Passw0rd!")


def test_token_valid_just_before_expiry(db, user):
    token = request_reset_token(db, "alice", "9876543210", now=T0)
    consume_reset_token(db, token, "NewPass1!", now=T0 + timedelta(minutes=9, seconds=59))


def test_unknown_token_rejected(db, user):
    with pytest.raises(InvalidOrExpiredTokenError):
        consume_reset_token(db, "f" * 64, "NewPass1!", now=T0)


def test_multiple_outstanding_tokens_per_user(db, user):
    first = request_reset_token(db, "alice", "9876543210", now=T0)
    second = request_reset_token(db, "alice", "9876543210", now=T0 + timedelta(minutes=1))

    assert first != second
    assert db.query(PasswordResetToken).count() == 2

    consume_reset_token(db, second, "NewPass1!", now=T0 + timedelta(minutes=2))
    consume_reset_token(db, first, "NewPass2!", now=T0 + timedelta(minutes=3))
    verify_credentials(db, "alice", "NewPass2!")


def test_failed_password_update_keeps_token_valid(db, user, monkeypatch):
    token = request_reset_token(db, "alice", "9876543210", now=T0)

    def failing_update(self, user_id, password_hashed, commit=True):
        raise OperationalError("UPDATE tbusers", {}, Exception("database is locked"))

    with monkeypatch.context() as patch:
        patch.setattr(UserRepository, "change_password_user_repository", failing_update)
        with pytest.raises(WriteFailedError):
            consume_reset_token(db, token, "NewPass1!", now=T0 + timedelta(minutes=1))

    assert db.query(PasswordResetToken).filter(PasswordResetToken.prt_token == token).count() == 1
    verify_credentials(db, "alice", "Passw0rd!")

    consume_reset_token(db, token, "NewPass1!", now=T0 + timedelta(minutes=2))
    verify_credentials(db, "alice", "NewPass1!")


def test_purge_expired_only_removes_expired(db, user):
    request_reset_token(db, "alice", "9876543210", now=T0)
    fresh = request_reset_token(db, "alice", "9876543210", now=T0 + timedelta(minutes=8))

    assert purge_expired_reset_tokens(db, now=T0 + timedelta(minutes=12)) == 1

    remaining = db.query(PasswordResetToken).one()
    assert remaining.prt_token == fresh


def test_request_purges_that_users_expired_tokens(db, user):
    request_reset_token(db, "alice", "9876543210", now=T0)
    request_reset_token(db, "alice", "9876543210", now=T0 + timedelta(hours=1))

    assert db.query(PasswordResetToken).count() == 1


def test_non_utc_now_is_normalized(db, user):
    # 17:30 en +05:30 son las 12:00 UTC
    ist = timezone(timedelta(hours=5, minutes=30))
    issued = T0.astimezone(ist)
    token = request_reset_token(db, "alice", "9876543210", now=issued)

    stored = db.query(PasswordResetToken).one()
    assert stored.prt_expires_at.replace(tzinfo=timezone.utc) == T0 + timedelta(minutes=10)

    with pytest.raises(InvalidOrExpiredTokenError):
        consume_reset_token(db, token, "NewPass1!", now=issued + timedelta(minutes=11))
    verify_credentials(db, "alice", "Passw0rd!")

    fresh = request_reset_token(db, "alice", "9876543210", now=issued + timedelta(minutes=12))
    consume_reset_token(db, fresh, "NewPass1!", now=T0 + timedelta(minutes=21))
    verify_credentials(db, "alice", "NewPass1!")


def test_cleanup_job_purges_expired_tokens(db, user, count_rows):
    now = datetime.now(timezone.utc)
    # El vigente primero: emitir limpia los vencidos del mismo usuario
    fresh = request_reset_token(db, "alice", "9876543210", now=now)
    request_reset_token(db, "alice", "9876543210", now=now - timedelta(hours=1))
    assert db.query(PasswordResetToken).count() == 2
    db.close()

    assert cleanup_expired_reset_tokens_job() == 1
    assert count_rows(PasswordResetToken) == 1

    remaining = db.query(PasswordResetToken).one()
    assert remaining.prt_token == fresh
