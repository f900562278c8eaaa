import logging
from typing import Optional

import bcrypt

from tinyapp.config import settings
from tinyapp.exceptions import (
    EmailTakenError,
    IncompleteFieldsError,
    PasswordTooLongError,
    UsernameTakenError,
)
from tinyapp.models.user import User
from tinyapp.services.id_generator import generate_unique_id
from tinyapp.storage.strategies import UserStore

logger = logging.getLogger(__name__)

# bcrypt only looks at the first 72 bytes; newer releases refuse longer input
BCRYPT_MAX_PASSWORD_BYTES = 72


class AuthService:
    """
    Registration and login against a UserStore.

    The store is injected (not created here), so tests get a fresh one per
    test and the app shares a single process-wide instance.
    """

    def __init__(self, user_store: UserStore, rounds: Optional[int] = None):
        """
        Initialize auth service.

        Args:
            user_store: Where users live
            rounds: bcrypt cost factor (defaults to settings.bcrypt_rounds)
        """
        self.user_store = user_store
        self.rounds = rounds if rounds is not None else settings.bcrypt_rounds
        # Checked against when no user matches, so both failure paths cost the same
        self._dummy_hash = bcrypt.hashpw(b"not-a-real-password", bcrypt.gensalt(self.rounds))

    def register_user(self, username: str, email: str, password: str) -> User:
        """
        Create a new account.

        Process:
        1. Reject empty fields and over-long passwords
        2. Hash the password
        3. Under the store lock: reject a taken username or email,
           generate a fresh user ID, insert

        Raises:
            IncompleteFieldsError: If any field is empty
            UsernameTakenError: If the username is in use (checked first)
            EmailTakenError: If the email is in use
            PasswordTooLongError: If the password exceeds bcrypt's limit
        """
        if not username or not email or not password:
            raise IncompleteFieldsError()

        password_bytes = password.encode("utf-8")
        if len(password_bytes) > BCRYPT_MAX_PASSWORD_BYTES:
            raise PasswordTooLongError()

        # Hash outside the lock; it's the slow part
        password_hash = bcrypt.hashpw(password_bytes, bcrypt.gensalt(self.rounds))

        with self.user_store.lock:
            existing_field = self.user_store.find_existing_field(username, email)
            if existing_field == "username":
                raise UsernameTakenError()
            if existing_field == "email":
                raise EmailTakenError()

            user_id = generate_unique_id(settings.user_id_length, self.user_store.exists)
            user = User(
                id=user_id,
                username=username,
                email=email,
                password_hash=password_hash.decode("utf-8"),
            )
            self.user_store.add(user)

        logger.info("Registered user %s (%s)", user.id, user.username)
        return user

    def authenticate(
        self,
        login: str,
        password: str,
        match_by_username: Optional[bool] = None
    ) -> Optional[User]:
        """
        Check a login/password pair.

        Login policy: by default `login` is matched against username OR email
        in one pass. Pass match_by_username=True to accept usernames only, or
        False to accept emails only.

        Returns:
            The matching User, or None. None never says whether the account
            or the password was wrong.
        """
        if not login or not password:
            return None

        if match_by_username is None:
            user = self.user_store.get_by_login(login)
        elif match_by_username:
            user = self.user_store.get_by_username(login)
        else:
            user = self.user_store.get_by_email(login)

        password_bytes = password.encode("utf-8")
        if len(password_bytes) > BCRYPT_MAX_PASSWORD_BYTES:
            # can never match a hash we created; still pay for one bcrypt check
            bcrypt.checkpw(password_bytes[:BCRYPT_MAX_PASSWORD_BYTES], self._dummy_hash)
            logger.warning("Failed login for %r", login)
            return None

        stored_hash = user.password_hash.encode("utf-8") if user else self._dummy_hash
        valid = bcrypt.checkpw(password_bytes, stored_hash)

        if user is None or not valid:
            logger.warning("Failed login for %r", login)
            return None

        logger.info("User %s logged in", user.id)
        return user

    def get_user(self, user_id: Optional[str]) -> Optional[User]:
        """Get user by ID (None-safe, for session lookups)"""
        if not user_id:
            return None
        return self.user_store.get(user_id)
