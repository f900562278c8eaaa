import logging
from typing import Callable, List, Optional

from tinyapp.config import settings
from tinyapp.exceptions import NotAuthenticatedError, NotFoundError, OwnershipError
from tinyapp.models.url import ShortURL, VisitEvent, VisitStats, utcnow
from tinyapp.services.id_generator import generate_random_string, generate_unique_id
from tinyapp.services.url_validator import normalize_url
from tinyapp.storage.strategies import URLStore

logger = logging.getLogger(__name__)


class URLService:
    """
    Short URL service: ownership, CRUD and visit analytics.

    The URL store is injected, never created here. Mutations that read
    before they write hold the store lock for the whole step.
    """

    def __init__(
        self,
        url_store: URLStore,
        key_length: Optional[int] = None,
        key_generator: Callable[[int], str] = generate_random_string
    ):
        """
        Initialize URL service with its store.

        Args:
            url_store: Where short URLs live
            key_length: Short key length (defaults to settings.short_key_length)
            key_generator: Candidate key source, checked against the store
        """
        self.url_store = url_store
        self.key_length = key_length or settings.short_key_length
        self.key_generator = key_generator

    def urls_for_user(self, user_id: str) -> List[ShortURL]:
        """All links owned by `user_id` in creation order (empty if none)"""
        return [record for record in self.url_store.all() if record.owner_id == user_id]

    def user_owns_url(self, user_id: str, short_key: str) -> bool:
        """
        True if `short_key` exists and belongs to `user_id`.

        A key that doesn't exist isn't owned by anybody.
        """
        record = self.url_store.get(short_key)
        if record is None:
            return False
        return record.owner_id == user_id

    def require_owner(self, user_id: Optional[str], short_key: str) -> None:
        """
        Guard for update/delete.

        Raises:
            NotAuthenticatedError: If nobody is logged in
            OwnershipError: If the user doesn't own the key (or it doesn't exist)
        """
        if not user_id:
            raise NotAuthenticatedError()
        if not self.user_owns_url(user_id, short_key):
            logger.warning("User %s tried to modify %s without owning it", user_id, short_key)
            raise OwnershipError()

    def get_url(self, short_key: str) -> ShortURL:
        """
        Raises:
            NotFoundError: If the key doesn't exist
        """
        record = self.url_store.get(short_key)
        if record is None:
            raise NotFoundError(short_key)
        return record

    def create_short_url(self, long_url: str, owner_id: str) -> ShortURL:
        """
        Create a new short URL owned by `owner_id`.

        Note: the same long URL can be shortened any number of times; every
        call gets its own key and its own visit log.

        Process:
        1. Add a scheme if missing and validate
        2. Generate a key not in the store (retries on collision)
        3. Store the record with an empty visit log

        Raises:
            InvalidURLError: If the long URL is malformed
        """
        normalized = normalize_url(long_url)

        with self.url_store.lock:
            short_key = generate_unique_id(
                self.key_length, self.url_store.exists, generator=self.key_generator
            )
            record = ShortURL(
                short_key=short_key,
                owner_id=owner_id,
                long_url=normalized,
                created_at=utcnow(),
            )
            self.url_store.add(record)

        logger.info("User %s created %s -> %s", owner_id, short_key, normalized)
        return record

    def update_short_url(self, short_key: str, new_long_url: str) -> bool:
        """
        Point `short_key` at a new long URL.

        Submitting the URL it already points to is a no-op: nothing changes
        and last_modified_at keeps its value.

        Returns:
            True if the record changed, False for a no-op

        Raises:
            InvalidURLError: If the new URL is malformed
            NotFoundError: If the key doesn't exist
        """
        normalized = normalize_url(new_long_url)

        with self.url_store.lock:
            record = self.get_url(short_key)
            if record.long_url == normalized:
                return False
            record.long_url = normalized
            record.last_modified_at = utcnow()

        logger.info("Updated %s -> %s", short_key, normalized)
        return True

    def delete_short_url(self, short_key: str) -> None:
        """
        Raises:
            NotFoundError: If the key doesn't exist
        """
        if not self.url_store.delete(short_key):
            raise NotFoundError(short_key)
        logger.info("Deleted %s", short_key)

    def record_visit(self, short_key: str, visitor_id: str) -> None:
        """
        Append a visit stamped now to the key's visit log.

        Raises:
            NotFoundError: If the key doesn't exist
        """
        visit = VisitEvent(timestamp=utcnow(), visitor_id=visitor_id)
        if not self.url_store.append_visit(short_key, visit):
            raise NotFoundError(short_key)
        logger.debug("Visit to %s by %s", short_key, visitor_id)

    def resolve(self, short_key: str, visitor_id: str) -> str:
        """
        Record a visit and return the long URL to redirect to.

        Raises:
            NotFoundError: If the key doesn't exist
        """
        with self.url_store.lock:
            self.record_visit(short_key, visitor_id)
            return self.get_url(short_key).long_url

    def get_visit_stats(self, short_key: str) -> VisitStats:
        """
        Total and unique visit counts for a key.

        A link nobody visited yet is {total: 0, unique: 0}, not an error.

        Raises:
            NotFoundError: If the key doesn't exist
        """
        with self.url_store.lock:
            record = self.get_url(short_key)
            return VisitStats.from_log(record.visit_log)
