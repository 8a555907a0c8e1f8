"""Login sessions.

A login creates a ``UserSession`` and hands back a signed bearer token that
names it. The session row is what makes logout effective; its
``expires_at`` is checked on every use.
"""

from datetime import datetime, timedelta

import structlog
from protean import handle
from protean.fields import DateTime, Identifier, String
from protean.utils.globals import current_domain

from storefront import config
from storefront.domain import storefront
from storefront.exceptions import AuthExpiredError
from storefront.shared.security import create_token, decode_token
from storefront.user.user import User

logger = structlog.get_logger(__name__)


@storefront.aggregate
class UserSession:
    user_id = Identifier(required=True)
    email = String(required=True, max_length=254)
    role = String(required=True, max_length=20)
    created_at = DateTime(required=True)
    expires_at = DateTime(required=True)

    @classmethod
    def open(cls, user: User, ttl_minutes: int):
        now = datetime.now()
        return cls(
            user_id=user.id,
            email=user.email,
            role=user.role,
            created_at=now,
            expires_at=now + timedelta(minutes=ttl_minutes),
        )

    def is_expired(self, at: datetime | None = None) -> bool:
        return (at or datetime.now()) >= self.expires_at


@storefront.command(part_of="UserSession")
class LoginUser:
    email = String(required=True, max_length=254)
    password = String(required=True, max_length=128)


@storefront.command(part_of="UserSession")
class LogoutUser:
    session_id = Identifier(required=True)


@storefront.command_handler(part_of=UserSession)
class SessionHandler:
    @handle(LoginUser)
    def login(self, command):
        user_repo = current_domain.repository_for(User)
        user = user_repo.find_by_email(command.email)
        if user is None or not user.check_password(command.password):
            logger.info("Login rejected", email=command.email)
            raise AuthExpiredError({"credentials": ["Invalid email or password"]})

        user.record_login()
        user_repo.add(user)

        session = UserSession.open(user, config.SESSION_TTL_MINUTES)
        current_domain.repository_for(UserSession).add(session)

        token = create_token({"sid": str(session.id), "sub": str(user.id)}, config.SESSION_TTL_MINUTES)
        logger.info("User logged in", user_id=str(user.id), session_id=str(session.id))
        return {"token": token, "expires_at": session.expires_at.isoformat(), "user": user.to_payload()}

    @handle(LogoutUser)
    def logout(self, command):
        repo = current_domain.repository_for(UserSession)
        session = repo._dao.query.filter(id=str(command.session_id)).all().first
        if session is None:
            return

        repo._dao.delete(session)
        logger.info("User logged out", user_id=str(session.user_id), session_id=str(session.id))


def resolve_session(token: str) -> tuple[UserSession, User]:
    """Return the live session named by ``token`` and its user.

    Raises:
        AuthExpiredError: the token is invalid, or its session has ended,
            expired or belongs to a user that no longer exists.
    """
    claims = decode_token(token)

    session_repo = current_domain.repository_for(UserSession)
    session = session_repo._dao.query.filter(id=str(claims.get("sid"))).all().first
    if session is None:
        raise AuthExpiredError({"session": ["Session has ended"]})
    if session.is_expired():
        session_repo._dao.delete(session)
        raise AuthExpiredError({"session": ["Session has expired"]})

    user = current_domain.repository_for(User).find_by_id(session.user_id)
    if user is None:
        raise AuthExpiredError({"session": ["Account no longer exists"]})

    return session, user


def end_sessions_for(user_id) -> int:
    repo = current_domain.repository_for(UserSession)
    sessions = repo._dao.query.filter(user_id=str(user_id)).all().items
    for session in sessions:
        repo._dao.delete(session)
    return len(sessions)
