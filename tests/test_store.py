"""
Unit tests for the in-memory entity store and relation index.

Tests cover:
- Identifier allocation and reuse rules
- Lookup, update and delete of missing entities
- Case-insensitive unique keys
- Concurrent inserts and appends
"""

import threading

import pytest

from user_orders_api.app.core.errors import ConflictError, NotFoundError
from user_orders_api.app.core.store import EntityStore, RelationIndex, normalize_email
from user_orders_api.app.schemas.user import User, UserStatus


def make_user(name="Jean", email="jean@example.com"):
    return User(name=name, email=email)


class TestEntityStore:
    """Tests for EntityStore."""

    @pytest.fixture
    def users(self):
        return EntityStore(
            "User",
            unique_key=lambda user: normalize_email(user.email),
            unique_message="Email already in use",
        )

    def test_insert_assigns_increasing_ids(self, users):
        first = users.insert(make_user(email="a@example.com"))
        second = users.insert(make_user(email="b@example.com"))

        assert (first, second) == (1, 2)
        assert users.get(2).email == "b@example.com"
        assert users.next_id == 3

    def test_ids_not_reused_after_delete(self, users):
        users.insert(make_user(email="a@example.com"))
        assert users.delete(1) is True

        assert users.insert(make_user(email="b@example.com")) == 2

    def test_list_keeps_insertion_order(self, users):
        for email in ("c@example.com", "a@example.com", "b@example.com"):
            users.insert(make_user(email=email))

        assert [user.email for user in users.list()] == [
            "c@example.com",
            "a@example.com",
            "b@example.com",
        ]

    def test_missing_entity(self, users):
        with pytest.raises(NotFoundError):
            users.get(99)
        with pytest.raises(NotFoundError):
            users.update(99, lambda user: user)
        assert users.delete(99) is False
        assert users.find(99) is None

    def test_unique_key_is_case_insensitive(self, users):
        users.insert(make_user(email="Alice@Example.com"))

        with pytest.raises(ConflictError):
            users.insert(make_user(email="alice@example.COM"))
        # The rejected insert did not consume an identifier
        assert users.next_id == 2
        assert len(users) == 1

    def test_delete_releases_unique_key(self, users):
        users.insert(make_user(email="alice@example.com"))
        users.delete(1)

        assert users.insert(make_user(email="ALICE@example.com")) == 2

    def test_update_replaces_entity(self, users):
        users.insert(make_user(email="alice@example.com"))

        updated = users.update(1, lambda user: user.model_copy(update={"status": UserStatus.INACTIVE}))

        assert updated.id == 1
        assert users.get(1).status == UserStatus.INACTIVE

    def test_update_rejects_taken_key(self, users):
        users.insert(make_user(email="alice@example.com"))
        users.insert(make_user(email="bob@example.com"))

        with pytest.raises(ConflictError):
            users.update(2, lambda user: user.model_copy(update={"email": "ALICE@example.com"}))
        assert users.get(2).email == "bob@example.com"

    def test_update_moves_unique_key(self, users):
        users.insert(make_user(email="alice@example.com"))
        users.update(1, lambda user: user.model_copy(update={"email": "alice@new.example.com"}))

        assert users.find_by_key("alice@new.example.com").id == 1
        assert users.find_by_key("alice@example.com") is None
        assert users.insert(make_user(email="alice@example.com")) == 2

    def test_clear_restarts_ids(self, users):
        users.insert(make_user(email="a@example.com"))
        users.insert(make_user(email="b@example.com"))
        users.clear()

        assert len(users) == 0
        assert users.insert(make_user(email="a@example.com")) == 1

    def test_concurrent_inserts_get_distinct_ids(self, users):
        def worker(offset):
            for i in range(50):
                users.insert(make_user(email=f"user{offset}-{i}@example.com"))

        threads = [threading.Thread(target=worker, args=(n,)) for n in range(8)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        ids = [user.id for user in users.list()]
        assert len(ids) == 400
        assert sorted(ids) == list(range(1, 401))
        assert users.next_id == 401

    def test_concurrent_duplicate_email_single_winner(self, users):
        results = []
        barrier = threading.Barrier(10)

        def worker():
            barrier.wait()
            try:
                users.insert(make_user(email="same@example.com"))
                results.append("ok")
            except ConflictError:
                results.append("conflict")

        threads = [threading.Thread(target=worker) for _ in range(10)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert results.count("ok") == 1
        assert results.count("conflict") == 9


class TestRelationIndex:
    """Tests for RelationIndex."""

    def test_unknown_parent_has_empty_list(self):
        index = RelationIndex()
        assert index.list_by_parent(42) == []

    def test_append_preserves_order(self):
        index = RelationIndex()
        index.append(1, "a")
        index.append(1, "b")
        index.append(2, "c")

        assert index.list_by_parent(1) == ["a", "b"]
        assert index.count() == 3
        assert index.snapshot() == {1: ["a", "b"], 2: ["c"]}

    def test_returned_list_is_a_copy(self):
        index = RelationIndex()
        index.append(1, "a")
        index.list_by_parent(1).append("b")

        assert index.list_by_parent(1) == ["a"]

    def test_replace_and_remove_parent(self):
        index = RelationIndex()
        index.append(1, "a")
        index.append(1, "b")

        assert index.replace(1, lambda child: child == "b", "B") is True
        assert index.replace(1, lambda child: child == "z", "Z") is False
        assert index.remove_parent(1) == ["a", "B"]
        assert index.list_by_parent(1) == []

    def test_concurrent_appends_same_parent(self):
        index = RelationIndex()

        def worker():
            for i in range(200):
                index.append(7, i)

        threads = [threading.Thread(target=worker) for _ in range(5)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert len(index.list_by_parent(7)) == 1000
