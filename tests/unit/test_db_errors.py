from sqlalchemy.exc import IntegrityError, OperationalError

from identity_store.db.errors import duplicate_columns, is_duplicate


class _Diag:
    def __init__(self, message_detail):
        self.message_detail = message_detail


class _PgError(Exception):
    def __init__(self, pgcode, detail):
        super().__init__("duplicate key value violates unique constraint")
        self.pgcode = pgcode
        self.diag = _Diag(detail)


def _integrity(orig):
    return IntegrityError("INSERT ...", {}, orig)


def test_sqlite_single_column():
    exc = _integrity(Exception("UNIQUE constraint failed: users.email"))
    assert duplicate_columns(exc) == {"email": None}
    assert is_duplicate(exc)


def test_sqlite_composite_columns():
    exc = _integrity(Exception("UNIQUE constraint failed: users_api_keys.user_id, users_api_keys.key_name"))
    assert duplicate_columns(exc) == {"user_id": None, "key_name": None}


def test_sqlite_foreign_key_is_not_duplicate():
    exc = _integrity(Exception("FOREIGN KEY constraint failed"))
    assert duplicate_columns(exc) is None
    assert not is_duplicate(exc)


def test_postgres_detail_with_values():
    exc = _integrity(_PgError("23505", "Key (email)=(alice@example.com) already exists."))
    assert duplicate_columns(exc) == {"email": "alice@example.com"}


def test_postgres_composite_detail():
    exc = _integrity(_PgError("23505", "Key (user_id, key_name)=(alice, my, key) already exists."))
    assert duplicate_columns(exc) == {"user_id": "alice", "key_name": "my, key"}


def test_postgres_other_constraint_is_not_duplicate():
    exc = _integrity(_PgError("23503", "Key (user_id)=(ghost) is not present in table \"users\"."))
    assert duplicate_columns(exc) is None


def test_non_integrity_errors_are_ignored():
    assert duplicate_columns(OperationalError("SELECT 1", {}, Exception("database is locked"))) is None
    assert duplicate_columns(ValueError("nope")) is None
