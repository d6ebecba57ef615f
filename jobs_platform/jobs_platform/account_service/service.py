"""
Account service: signup, login and bearer-token verification.

The service is built once at startup from Settings and shared by every
request. Each call receives its own database session; steps run strictly in
order (validate, lookup, hash or compare, persist or sign).
"""
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Callable, Optional
import logging

import jwt
import pydantic
from passlib.context import CryptContext
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from .auth import (
    create_access_token,
    decode_access_token,
    extract_bearer_token,
    hash_password,
    verify_password,
)
from .config import Settings
from .errors import (
    DuplicateEmailError,
    ForbiddenError,
    InternalError,
    InvalidCredentialsError,
    InvalidOrExpiredTokenError,
    MissingTokenError,
    NotFoundError,
    ValidationError,
)
from .models import User
from .schemas import LoginRequest, SessionClaims, SignupRequest

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def require_fields(payload: pydantic.BaseModel, fields: list[str]) -> None:
    """Raise ValidationError naming every absent or blank field."""
    missing = []
    for field in fields:
        value = getattr(payload, field)
        if value is None or (isinstance(value, str) and not value.strip()):
            info = type(payload).model_fields[field]
            missing.append(info.alias or field)
    if missing:
        raise ValidationError(f"All fields are required (missing: {', '.join(missing)})")


@dataclass(frozen=True)
class LoginResult:
    token: str
    claims: SessionClaims


class AccountService:
    def __init__(
        self,
        settings: Settings,
        pwd_context: CryptContext,
        clock: Callable[[], datetime] = _utcnow,
    ):
        self.secret = settings.JWT_SECRET
        self.algorithm = settings.JWT_ALGORITHM
        self.token_lifetime = timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
        self.pwd_context = pwd_context
        self.clock = clock

    def find_user(self, db: Session, email: str) -> Optional[User]:
        try:
            return db.query(User).filter(User.email == email).first()
        except SQLAlchemyError as e:
            logger.error("User lookup failed for email=%s: %s", email, e)
            raise InternalError() from e

    def signup(self, db: Session, payload: SignupRequest) -> User:
        require_fields(payload, ["name", "email", "password", "user_type"])

        if self.find_user(db, payload.email) is not None:
            raise DuplicateEmailError()

        try:
            new_user = User(
                name=payload.name,
                email=payload.email,
                password=hash_password(self.pwd_context, payload.password),
                user_type=payload.user_type,
            )
            db.add(new_user)
            db.commit()
            db.refresh(new_user)
        except IntegrityError as e:
            # A concurrent signup won the unique index on email
            db.rollback()
            raise DuplicateEmailError() from e
        except Exception as e:
            db.rollback()
            logger.error("Signup failed for email=%s: %s", payload.email, e)
            raise InternalError() from e

        logger.info("Account created: user_id=%s, user_type=%s", new_user.id, new_user.user_type)
        return new_user

    def login(self, db: Session, payload: LoginRequest) -> LoginResult:
        require_fields(payload, ["email", "password", "user_type"])

        user = self.find_user(db, payload.email)
        if user is None:
            raise NotFoundError()

        # User type is checked before the password
        if payload.user_type != user.user_type:
            raise ForbiddenError()

        if not verify_password(self.pwd_context, payload.password, user.password):
            raise InvalidCredentialsError()

        claims = self.issue_claims(user)
        try:
            token = create_access_token(claims, self.secret, self.algorithm)
        except Exception as e:
            logger.error("Token signing failed for user_id=%s: %s", user.id, e)
            raise InternalError() from e
        return LoginResult(token=token, claims=claims)

    def issue_claims(self, user: User) -> SessionClaims:
        issued_at = int(self.clock().timestamp())
        return SessionClaims(
            user_id=user.id,
            user_type=user.user_type,
            issued_at=issued_at,
            expires_at=issued_at + int(self.token_lifetime.total_seconds()),
        )

    def verify(self, authorization: Optional[str]) -> SessionClaims:
        token = extract_bearer_token(authorization)
        if token is None:
            raise MissingTokenError()
        try:
            return decode_access_token(token, self.secret, self.algorithm)
        except (jwt.InvalidTokenError, pydantic.ValidationError) as e:
            logger.debug("Token rejected: %s", e)
            raise InvalidOrExpiredTokenError() from e
