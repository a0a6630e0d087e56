import pytest
from authapi.core.exceptions import UniquenessError


def test_create_assigns_id_and_token(store):
    user = store.create(name="ann", email="ann@x.com", password_hash="hashed")
    assert user.id
    assert len(user.access_token) == 256
    assert user.name == "ann"
    assert user.email == "ann@x.com"
    assert user.hashed_password == "hashed"
    assert store.count() == 1


def test_each_user_gets_its_own_token(store):
    ann = store.create(name="ann", email="ann@x.com", password_hash="h1")
    bob = store.create(name="bob", email="bob@x.com", password_hash="h2")
    assert ann.id != bob.id
    assert ann.access_token != bob.access_token


def test_duplicate_email_is_rejected(store):
    store.create(name="ann", email="ann@x.com", password_hash="h1")
    with pytest.raises(UniquenessError) as exc_info:
        store.create(name="annie", email="ann@x.com", password_hash="h2")
    assert set(exc_info.value.errors) == {"email"}
    assert exc_info.value.errors["email"]["kind"] == "unique"
    assert store.count() == 1


def test_duplicate_name_is_rejected(store):
    store.create(name="ann", email="ann@x.com", password_hash="h1")
    with pytest.raises(UniquenessError) as exc_info:
        store.create(name="ann", email="other@x.com", password_hash="h2")
    assert set(exc_info.value.errors) == {"name"}
    assert store.count() == 1


def test_both_fields_reported_when_both_collide(store):
    store.create(name="ann", email="ann@x.com", password_hash="h1")
    with pytest.raises(UniquenessError) as exc_info:
        store.create(name="ann", email="ann@x.com", password_hash="h2")
    assert set(exc_info.value.errors) == {"name", "email"}


def test_unique_constraint_catches_race(store, monkeypatch):
    store.create(name="ann", email="ann@x.com", password_hash="h1")
    # Simulate a concurrent insert landing between the check and the commit
    original = store._collisions
    calls = []

    def miss_first_check(db, **values):
        calls.append(values)
        if len(calls) == 1:
            return {}
        return original(db, **values)

    monkeypatch.setattr(store, "_collisions", miss_first_check)
    with pytest.raises(UniquenessError) as exc_info:
        store.create(name="ann2", email="ann@x.com", password_hash="h2")
    assert "email" in exc_info.value.errors
    assert store.count() == 1


def test_find_by_email(store):
    created = store.create(name="ann", email="ann@x.com", password_hash="h1")
    found = store.find_by_email("ann@x.com")
    assert found is not None
    assert found.id == created.id
    assert store.find_by_email("ANN@x.com") is None
    assert store.find_by_email("nobody@x.com") is None


def test_find_by_access_token(store):
    created = store.create(name="ann", email="ann@x.com", password_hash="h1")
    found = store.find_by_access_token(created.access_token)
    assert found is not None
    assert found.id == created.id
    assert store.find_by_access_token("bogus") is None
    assert store.find_by_access_token(created.access_token[:-1]) is None
