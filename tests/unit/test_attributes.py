import json

import pytest

from identity_store.db.database import transaction
from identity_store.db.repositories.attributes import AttributeStore
from identity_store.db.schemas import UserWithAttributes


MAPPING_PAIRS = [
    ({"a": 1, "b": "two"}, {"a": 1, "b": "two"}),
    ({"a": 1, "b": "two"}, {}),
    ({"a": 1, "b": "two"}, {"b": "changed", "c": {"nested": [1, 2]}}),
    ({}, {"only": None}),
    ({"x": True}, {"x": False}),
    ({"x": 1}, {"x": True}),
    ({"x": 1}, {"x": 1.0}),
    ({"x": [1, 2]}, {"x": [True, 2.0]}),
]


@pytest.mark.parametrize("first,second", MAPPING_PAIRS)
def test_last_stored_mapping_wins(store, alice, first, second):
    store.store_attributes("alice", UserWithAttributes(attributes=first))
    store.store_attributes("alice", UserWithAttributes(attributes=second))

    loaded = UserWithAttributes()
    store.load_attributes("alice", loaded)
    assert loaded.attributes == second
    assert json.dumps(loaded.attributes, sort_keys=True) == json.dumps(second, sort_keys=True)


def test_load_with_nothing_stored_is_empty(store, alice):
    loaded = UserWithAttributes(attributes={"stale": 1})
    store.load_attributes("alice", loaded)
    assert loaded.attributes == {}


def test_entity_kinds_are_isolated(session_factory):
    users = AttributeStore("user")
    gateways = AttributeStore("gateway")
    with transaction(session_factory) as db:
        users.store_attributes(db, "shared-id", UserWithAttributes(attributes={"a": 1}))
        gateways.store_attributes(db, "shared-id", UserWithAttributes(attributes={"a": 2, "b": 3}))

    with transaction(session_factory) as db:
        assert users.get_attributes(db, "shared-id") == {"a": 1}
        assert gateways.get_attributes(db, "shared-id") == {"a": 2, "b": 3}

        # Reconciling one kind never touches the other
        users.store_attributes(db, "shared-id", UserWithAttributes(attributes={}))
        assert users.get_attributes(db, "shared-id") == {}
        assert gateways.get_attributes(db, "shared-id") == {"a": 2, "b": 3}


def test_result_receives_persisted_mapping(session_factory):
    attributes = AttributeStore("user")
    result = UserWithAttributes(attributes={"old": True})
    with transaction(session_factory) as db:
        attributes.store_attributes(db, "u1", UserWithAttributes(attributes={"k": [1, 2, 3]}), result)
    assert result.attributes == {"k": [1, 2, 3]}


def test_non_string_names_are_rejected(session_factory):
    attributes = AttributeStore("user")
    source = UserWithAttributes()
    source.attributes = {1: "one"}
    with pytest.raises(TypeError):
        with transaction(session_factory) as db:
            attributes.store_attributes(db, "u1", source)

    with transaction(session_factory) as db:
        assert attributes.get_attributes(db, "u1") == {}
