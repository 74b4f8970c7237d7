"""Authentication schemas and token claim types."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Role(str, Enum):
    """Closed set of roles a token can carry."""

    ADMIN = "ADMIN"
    USER = "USER"


class LoginRequest(BaseModel):
    """Credentials submitted to either login endpoint."""

    username: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)

    @field_validator("username")
    @classmethod
    def strip_username(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("username is required")
        return value


class AccessToken(BaseModel):
    """Issued bearer token and its expiry as a unix timestamp."""

    access_token: str
    valid_until: int


class AccessClaims(BaseModel):
    """Verified claims carried by an access token."""

    sub: str
    iss: str
    aud: str
    iat: int
    nbf: int
    exp: int
    jti: str = ""
    typ: Role

    model_config = ConfigDict(frozen=True)

    @property
    def role(self) -> Role:
        return self.typ


class MeResponse(BaseModel):
    id: str
    username: str
    type: Role
