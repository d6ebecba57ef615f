from passlib.context import CryptContext
from typing import Optional
import jwt

from .schemas import SessionClaims

REQUIRED_CLAIMS = ["userId", "userType", "iat", "exp"]


def build_password_context(rounds: int) -> CryptContext:
    # Use pbkdf2_sha256 to avoid external bcrypt backend issues in some environments
    return CryptContext(
        schemes=["pbkdf2_sha256"],
        deprecated="auto",
        pbkdf2_sha256__default_rounds=rounds,
    )


def hash_password(pwd_context: CryptContext, password: str) -> str:
    return pwd_context.hash(password)


def verify_password(pwd_context: CryptContext, plain_password: str, hashed_password: str) -> bool:
    try:
        return pwd_context.verify(plain_password, hashed_password)
    except ValueError:
        # Stored value is not a recognised hash
        return False


def create_access_token(claims: SessionClaims, secret: str, algorithm: str) -> str:
    payload = claims.model_dump(by_alias=True)
    return jwt.encode(payload, secret, algorithm=algorithm)


def decode_access_token(token: str, secret: str, algorithm: str) -> SessionClaims:
    """
    Verify signature and expiry of a token and return its claims.

    Raises:
        jwt.InvalidTokenError: Expired, tampered, malformed, or missing claims.
        pydantic.ValidationError: Claims present but of the wrong shape.
    """
    payload = jwt.decode(
        token,
        secret,
        algorithms=[algorithm],
        options={"require": REQUIRED_CLAIMS},
    )
    return SessionClaims.model_validate(payload)


def extract_bearer_token(authorization: Optional[str]) -> Optional[str]:
    if not authorization or not authorization.lower().startswith("bearer "):
        return None
    token = authorization.split(" ", 1)[1].strip()
    return token or None
