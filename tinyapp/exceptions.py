"""
Domain errors for tinyapp.

Services raise these; the API layer maps them to HTTP responses in
tinyapp.api.errors. A failed login is deliberately NOT an error here:
AuthService.authenticate returns None so callers can't tell an unknown
account from a wrong password.
"""

from typing import Optional


class TinyAppError(Exception):
    """Base class for every error raised by the service layer"""

    default_message = "Something went wrong."

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(TinyAppError):
    """Input was rejected before touching any store"""

    default_message = "The submitted data is invalid."


class IncompleteFieldsError(ValidationError):
    default_message = "Please complete all fields."


class InvalidURLError(ValidationError):
    default_message = "Please enter a valid URL."


class PasswordTooLongError(ValidationError):
    default_message = "Passwords can be at most 72 bytes long."


class CredentialTakenError(ValidationError):
    """
    A unique account field is already used by another user.

    `field` names the colliding field ("username" or "email").
    """

    field = ""

    def __init__(self, message: Optional[str] = None):
        super().__init__(message or f"The {self.field} you entered is already in use.")


class UsernameTakenError(CredentialTakenError):
    field = "username"


class EmailTakenError(CredentialTakenError):
    field = "email"


class NotAuthenticatedError(TinyAppError):
    default_message = "You must be logged in to do that!"


class OwnershipError(TinyAppError):
    default_message = "You don't have permission to do that!"


class NotFoundError(TinyAppError):
    default_message = "Short URL not found."

    def __init__(self, short_key: Optional[str] = None, message: Optional[str] = None):
        self.short_key = short_key
        if message is None and short_key is not None:
            message = f"Short URL '{short_key}' does not exist."
        super().__init__(message)
