from pydantic import BaseModel, ConfigDict, Field


class User(BaseModel):
    """
    Registered account.

    Lives in the UserStore for the lifetime of the process. Never mutated
    after registration (frozen), and never serialized to clients directly:
    API responses go through schemas.user.UserResponse, which has no hash.
    """

    id: str = Field(..., min_length=1, description="Random alphanumeric user ID")
    username: str = Field(..., min_length=1, description="Unique login name")
    email: str = Field(..., min_length=1, description="Unique email address")
    password_hash: str = Field(..., min_length=1, description="bcrypt hash of the password")

    model_config = ConfigDict(frozen=True)
