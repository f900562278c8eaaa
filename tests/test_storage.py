"""
Tests for the in-memory stores.
"""
import threading

import pytest
from pydantic import ValidationError

from tinyapp.models.url import ShortURL, VisitEvent
from tinyapp.models.user import User


def make_user(user_id, username, email):
    return User(id=user_id, username=username, email=email, password_hash="$2b$04$hash")


def make_url(short_key, owner_id="owner1", long_url="http://example.com"):
    return ShortURL(short_key=short_key, owner_id=owner_id, long_url=long_url)


class TestInMemoryUserStore:
    """Test user lookups and uniqueness helpers"""

    def test_add_and_get(self, user_store):
        user = make_user("aUA4CE", "user1", "user1@example.com")
        user_store.add(user)

        assert user_store.get("aUA4CE") == user
        assert user_store.exists("aUA4CE")
        assert len(user_store) == 1

    def test_get_unknown_returns_none(self, user_store):
        assert user_store.get("nope") is None
        assert not user_store.exists("nope")

    def test_duplicate_id_rejected(self, user_store):
        user_store.add(make_user("id1", "a", "a@x.com"))
        with pytest.raises(KeyError):
            user_store.add(make_user("id1", "b", "b@x.com"))

    def test_lookup_by_username_and_email(self, user_store):
        user = make_user("aUA4CE", "user1", "user1@example.com")
        user_store.add(user)

        assert user_store.get_by_username("user1") == user
        assert user_store.get_by_email("user1@example.com") == user
        assert user_store.get_by_username("user1@example.com") is None
        assert user_store.get_by_email("user1") is None

    def test_get_by_login_matches_either_field(self, user_store):
        user = make_user("aUA4CE", "user1", "user1@example.com")
        user_store.add(user)

        assert user_store.get_by_login("user1") == user
        assert user_store.get_by_login("user1@example.com") == user
        assert user_store.get_by_login("invalid") is None

    def test_find_existing_field(self, user_store):
        """Test the colliding field is reported, username first"""
        user_store.add(make_user("aUA4CE", "user1", "user1@example.com"))

        assert user_store.find_existing_field("user1", "fake@email.com") == "username"
        assert user_store.find_existing_field("fakeName", "user1@example.com") == "email"
        assert user_store.find_existing_field("user1", "user1@example.com") == "username"
        assert user_store.find_existing_field("newUsername", "new@email.com") is None

    def test_find_existing_field_across_fields(self, user_store):
        """Test a username equal to an existing email is taken, and vice versa"""
        user_store.add(make_user("aUA4CE", "user1", "user1@example.com"))

        assert user_store.find_existing_field("user1@example.com", "new@email.com") == "username"
        assert user_store.find_existing_field("newUsername", "user1") == "email"


class TestInMemoryURLStore:
    """Test short URL storage"""

    def test_add_get_delete(self, url_store):
        url_store.add(make_url("b2xVn2"))

        assert "b2xVn2" in url_store
        assert url_store.get("b2xVn2").long_url == "http://example.com"

        assert url_store.delete("b2xVn2") is True
        assert url_store.get("b2xVn2") is None
        assert url_store.delete("b2xVn2") is False

    def test_duplicate_key_rejected(self, url_store):
        url_store.add(make_url("b2xVn2"))
        with pytest.raises(KeyError):
            url_store.add(make_url("b2xVn2", long_url="http://other.com"))
        assert url_store.get("b2xVn2").long_url == "http://example.com"

    def test_insertion_order(self, url_store):
        for key in ["ccc", "aaa", "bbb"]:
            url_store.add(make_url(key))
        assert [record.short_key for record in url_store] == ["ccc", "aaa", "bbb"]

    def test_append_visit_preserves_order(self, url_store):
        url_store.add(make_url("b2xVn2"))
        for visitor in ["X", "Y", "Z"]:
            assert url_store.append_visit("b2xVn2", VisitEvent(visitor_id=visitor))

        log = url_store.get("b2xVn2").visit_log
        assert [visit.visitor_id for visit in log] == ["X", "Y", "Z"]

    def test_append_visit_unknown_key(self, url_store):
        assert url_store.append_visit("missing", VisitEvent(visitor_id="X")) is False

    def test_concurrent_visits_are_not_lost(self, url_store):
        """Test appends from many threads all land in the log"""
        url_store.add(make_url("b2xVn2"))

        def visit():
            for _ in range(100):
                url_store.append_visit("b2xVn2", VisitEvent(visitor_id="T"))

        threads = [threading.Thread(target=visit) for _ in range(8)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert len(url_store.get("b2xVn2").visit_log) == 800


class TestRecordShapes:
    """Test records validate their shape at construction"""

    def test_user_requires_non_empty_fields(self):
        with pytest.raises(ValidationError):
            User(id="", username="a", email="a@x.com", password_hash="h")

    def test_user_is_immutable(self):
        user = make_user("id1", "a", "a@x.com")
        with pytest.raises(ValidationError):
            user.username = "changed"

    def test_short_url_defaults(self):
        record = make_url("abc123")
        assert record.last_modified_at is None
        assert record.visit_log == []
        assert record.created_at.tzinfo is not None
