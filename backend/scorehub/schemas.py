"""
Pydantic models for request bodies.

Every JSON body is parsed into one of these before it reaches the account
service, so the service only ever sees well-typed values. ``parse_body``
turns a validation failure into the service error the route is documented
to answer with.
"""

from typing import Optional

from pydantic import BaseModel, Field, StrictInt, ValidationError

from scorehub.errors import ServiceError


class Credentials(BaseModel):
    # users.login is String(128)
    login: str = Field(..., strict=True, max_length=128)
    password: str = Field(..., strict=True)


class RegisterRequest(Credentials):
    """Body of ``POST /register``.

    Empty strings are not rejected here; the store refuses an empty login and
    the hasher refuses an empty password.
    """


class LoginRequest(Credentials):
    pass


class ScoreUpdateRequest(BaseModel):
    login: str = Field(..., strict=True, min_length=1, max_length=128)
    # additive delta, may be negative; strings, bools and floats are refused
    score: StrictInt


class AchievementUnlockRequest(BaseModel):
    login: str = Field(..., strict=True, min_length=1, max_length=128)
    achievement_id: str = Field(..., strict=True, min_length=1, max_length=64)


class UserLookup(BaseModel):
    login: Optional[str] = None
    player_id: Optional[str] = None


def parse_body(model, data, error: ServiceError):
    if not isinstance(data, dict):
        raise error
    try:
        return model.model_validate(data)
    except ValidationError as exc:
        raise error from exc
