import pytest
from datetime import datetime, timedelta, timezone
from sqlalchemy.exc import IntegrityError

from identity_store.db.schemas import ValidationToken
from identity_store.errors import ValidationTokenNotFound


def _token(value="tok-123", expires_in=3600, created_at=None):
    return ValidationToken(
        validation_token=value,
        created_at=created_at or datetime(2024, 1, 1, tzinfo=timezone.utc),
        expires_in=expires_in,
    )


def test_save_get_delete_roundtrip(store, alice):
    store.save_validation_token("alice", _token())

    fetched = store.get_validation_token("alice", "tok-123")
    assert fetched.validation_token == "tok-123"
    assert fetched.user_id == "alice"
    assert fetched.expires_in == 3600
    assert fetched.created_at == datetime(2024, 1, 1, tzinfo=timezone.utc)

    store.delete_validation_token("alice", "tok-123")
    with pytest.raises(ValidationTokenNotFound):
        store.get_validation_token("alice", "tok-123")



def test_non_utc_created_at_keeps_its_instant(store, alice):
    created = datetime(2024, 1, 1, 10, 0, tzinfo=timezone(timedelta(hours=-5)))
    store.save_validation_token("alice", _token(created_at=created))

    fetched = store.get_validation_token("alice", "tok-123")
    assert fetched.created_at == created
    assert fetched.created_at == datetime(2024, 1, 1, 15, 0, tzinfo=timezone.utc)
    assert fetched.created_at.utcoffset() == timedelta(0)
    assert fetched.is_expired(now=datetime(2024, 1, 1, 15, 59, tzinfo=timezone.utc)) is False
    assert fetched.is_expired(now=datetime(2024, 1, 1, 16, 1, tzinfo=timezone.utc)) is True

def test_second_delete_fails(store, alice):
    store.save_validation_token("alice", _token())
    store.delete_validation_token("alice", "tok-123")
    with pytest.raises(ValidationTokenNotFound):
        store.delete_validation_token("alice", "tok-123")


def test_token_is_bound_to_its_user(store, alice, bob):
    store.save_validation_token("alice", _token())
    with pytest.raises(ValidationTokenNotFound):
        store.get_validation_token("bob", "tok-123")
    with pytest.raises(ValidationTokenNotFound):
        store.delete_validation_token("bob", "tok-123")
    # Still present for its owner
    assert store.get_validation_token("ALICE", "tok-123").user_id == "alice"


def test_same_token_for_two_users(store, alice, bob):
    store.save_validation_token("alice", _token())
    store.save_validation_token("bob", _token())
    store.delete_validation_token("alice", "tok-123")
    assert store.get_validation_token("bob", "tok-123").user_id == "bob"


def test_duplicate_token_surfaces_storage_error(store, alice):
    store.save_validation_token("alice", _token())
    with pytest.raises(IntegrityError):
        store.save_validation_token("alice", _token())


def test_expiry_helpers():
    token = _token(created_at=datetime(2024, 1, 1, tzinfo=timezone.utc), expires_in=60)
    assert token.expires_at == datetime(2024, 1, 1, 0, 1, tzinfo=timezone.utc)
    assert not token.is_expired(datetime(2024, 1, 1, 0, 0, 59, tzinfo=timezone.utc))
    assert token.is_expired(datetime(2024, 1, 1, 0, 1, tzinfo=timezone.utc))
    assert token.is_expired(datetime.now(timezone.utc))

    fresh = ValidationToken(validation_token="t", expires_in=3600)
    assert not fresh.is_expired()
    assert fresh.expires_at - fresh.created_at == timedelta(hours=1)


def test_negative_expiry_rejected():
    with pytest.raises(ValueError):
        ValidationToken(validation_token="t", expires_in=-1)
