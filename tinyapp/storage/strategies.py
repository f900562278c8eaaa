"""
Store strategies using Strategy Pattern.

Services only talk to the UserStore / URLStore interfaces, so a real
database backend could be dropped in later without touching them.
Today the only backends are in-memory dicts that live as long as the process.

Every store owns a re-entrant lock. Single operations lock themselves;
services hold `store.lock` around multi-step work (check-then-insert,
read-then-update) so concurrent requests can't interleave.
"""

import threading
from abc import ABC, abstractmethod
from typing import Dict, Iterator, List, Optional

from tinyapp.models.url import ShortURL, VisitEvent
from tinyapp.models.user import User


class UserStore(ABC):
    """
    Abstract base class for user stores.

    Keyed by user ID; username and email are unique secondary keys.
    """

    def __init__(self):
        self.lock = threading.RLock()

    @abstractmethod
    def add(self, user: User) -> None:
        """
        Insert a new user.

        Raises:
            KeyError: If the user ID is already present
        """
        pass

    @abstractmethod
    def get(self, user_id: str) -> Optional[User]:
        """Get user by ID, or None"""
        pass

    @abstractmethod
    def get_by_username(self, username: str) -> Optional[User]:
        pass

    @abstractmethod
    def get_by_email(self, email: str) -> Optional[User]:
        pass

    @abstractmethod
    def all(self) -> List[User]:
        """All users in insertion order"""
        pass

    def exists(self, user_id: str) -> bool:
        return self.get(user_id) is not None

    def get_by_login(self, login: str) -> Optional[User]:
        """
        Get the first user whose username OR email equals `login`.

        Single pass over the users, so "bob" and "bob@x.com" both find bob.
        """
        with self.lock:
            for user in self.all():
                if user.username == login or user.email == login:
                    return user
        return None

    def find_existing_field(self, username: str, email: str) -> Optional[str]:
        """
        Report which registration field collides with an existing user.

        Usernames and emails share one login namespace (get_by_login matches
        either), so a new username clashing with someone's email counts as
        taken, and vice versa.

        Returns:
            "username", "email", or None when both are free.
            When both collide, "username" wins.
        """
        with self.lock:
            if self.get_by_login(username) is not None:
                return "username"
            if self.get_by_login(email) is not None:
                return "email"
        return None

    def __len__(self) -> int:
        return len(self.all())


class URLStore(ABC):
    """
    Abstract base class for short URL stores.

    Keyed by short_key, iterated in insertion order.
    """

    def __init__(self):
        self.lock = threading.RLock()

    @abstractmethod
    def add(self, record: ShortURL) -> None:
        """
        Insert a new record.

        Raises:
            KeyError: If the short key is already present
        """
        pass

    @abstractmethod
    def get(self, short_key: str) -> Optional[ShortURL]:
        pass

    @abstractmethod
    def delete(self, short_key: str) -> bool:
        """
        Delete a record.

        Returns:
            True if deleted, False if the key didn't exist
        """
        pass

    @abstractmethod
    def append_visit(self, short_key: str, visit: VisitEvent) -> bool:
        """
        Append a visit to a record's log.

        Returns:
            True if appended, False if the key didn't exist
        """
        pass

    @abstractmethod
    def all(self) -> List[ShortURL]:
        """All records in insertion order"""
        pass

    def exists(self, short_key: str) -> bool:
        return self.get(short_key) is not None

    def __contains__(self, short_key: str) -> bool:
        return self.exists(short_key)

    def __iter__(self) -> Iterator[ShortURL]:
        return iter(self.all())

    def __len__(self) -> int:
        return len(self.all())


class InMemoryUserStore(UserStore):
    """
    In-memory user store using Python dict.

    Pros:
    - No setup, no external dependencies
    - Fresh instance per test

    Cons:
    - Lost on restart
    - Not shared between worker processes
    """

    def __init__(self):
        super().__init__()
        self._users: Dict[str, User] = {}

    def add(self, user: User) -> None:
        with self.lock:
            if user.id in self._users:
                raise KeyError(f"User ID '{user.id}' already exists")
            self._users[user.id] = user

    def get(self, user_id: str) -> Optional[User]:
        return self._users.get(user_id)

    def get_by_username(self, username: str) -> Optional[User]:
        with self.lock:
            return next((u for u in self._users.values() if u.username == username), None)

    def get_by_email(self, email: str) -> Optional[User]:
        with self.lock:
            return next((u for u in self._users.values() if u.email == email), None)

    def all(self) -> List[User]:
        with self.lock:
            return list(self._users.values())


class InMemoryURLStore(URLStore):
    """
    In-memory short URL store using Python dict.

    dict preserves insertion order, which is the order urls_for_user
    reports links in.
    """

    def __init__(self):
        super().__init__()
        self._urls: Dict[str, ShortURL] = {}

    def add(self, record: ShortURL) -> None:
        with self.lock:
            if record.short_key in self._urls:
                raise KeyError(f"Short key '{record.short_key}' already exists")
            self._urls[record.short_key] = record

    def get(self, short_key: str) -> Optional[ShortURL]:
        return self._urls.get(short_key)

    def delete(self, short_key: str) -> bool:
        with self.lock:
            return self._urls.pop(short_key, None) is not None

    def append_visit(self, short_key: str, visit: VisitEvent) -> bool:
        with self.lock:
            record = self._urls.get(short_key)
            if record is None:
                return False
            record.visit_log.append(visit)
            return True

    def all(self) -> List[ShortURL]:
        with self.lock:
            return list(self._urls.values())
