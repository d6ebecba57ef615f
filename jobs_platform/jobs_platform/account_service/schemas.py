from pydantic import BaseModel, ConfigDict, Field

from typing import Literal, Optional

UserType = Literal["employer", "jobseeker"]


class SignupRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    name: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = None
    user_type: Optional[UserType] = Field(default=None, alias="userType")


class LoginRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    email: Optional[str] = None
    password: Optional[str] = None
    user_type: Optional[UserType] = Field(default=None, alias="userType")


class SessionClaims(BaseModel):
    """Decoded token payload; timestamps are UNIX seconds."""
    model_config = ConfigDict(populate_by_name=True)

    user_id: int = Field(alias="userId")
    user_type: UserType = Field(alias="userType")
    issued_at: int = Field(alias="iat")
    expires_at: int = Field(alias="exp")


class MessageResponse(BaseModel):
    message: str


class LoginResponse(BaseModel):
    message: str
    token: str


class DashboardResponse(BaseModel):
    message: str
    user: SessionClaims
