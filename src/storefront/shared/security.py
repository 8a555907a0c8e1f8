"""Password hashing and signed tokens."""

from datetime import UTC, datetime, timedelta

from jose import ExpiredSignatureError, JWTError, jwt
from passlib.context import CryptContext

from storefront import config
from storefront.exceptions import AuthExpiredError

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=config.BCRYPT_ROUNDS)


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(password: str, password_hash: str | None) -> bool:
    if not password_hash:
        return False
    return pwd_context.verify(password, password_hash)


def create_token(claims: dict, expires_minutes: int) -> str:
    """Sign ``claims`` with an ``exp`` claim ``expires_minutes`` from now."""
    to_encode = dict(claims)
    to_encode["exp"] = datetime.now(UTC) + timedelta(minutes=expires_minutes)
    return jwt.encode(to_encode, config.SECRET_KEY, algorithm=config.TOKEN_ALGORITHM)


def decode_token(token: str) -> dict:
    """Return the claims of a valid token.

    Raises:
        AuthExpiredError: the token is expired, malformed or not signed by us.
    """
    try:
        return jwt.decode(token, config.SECRET_KEY, algorithms=[config.TOKEN_ALGORITHM])
    except ExpiredSignatureError:
        raise AuthExpiredError({"token": ["Token has expired"]}) from None
    except JWTError:
        raise AuthExpiredError({"token": ["Token is invalid"]}) from None
