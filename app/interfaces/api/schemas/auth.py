"""Schemas used by the authentication and bootstrap endpoints."""

from pydantic import BaseModel, Field


class Token(BaseModel):
    """Access token returned after a successful login."""

    access_token: str
    token_type: str = "bearer"
    role: str


class InitRequest(BaseModel):
    secret: str | None = Field(default=None, description="Value of INIT_SECRET")


class InitResponse(BaseModel):
    success: bool
    message: str
    results: list[str]


__all__ = ["InitRequest", "InitResponse", "Token"]
