from pydantic import BaseModel, ConfigDict, Field


class UserCreate(BaseModel):
    # Empty defaults so missing fields reach the service's "complete all fields" check
    username: str = ""
    email: str = ""
    password: str = ""


class LoginRequest(BaseModel):
    login: str = Field("", description="Username or email")
    password: str = ""


class UserResponse(BaseModel):
    """Public view of a user - never includes the password hash"""
    id: str
    username: str
    email: str

    model_config = ConfigDict(from_attributes=True)


class MessageResponse(BaseModel):
    message: str
