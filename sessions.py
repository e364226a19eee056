"""
sessions.py - Session Manager
The session cookie only carries the user id and the time the session was issued.
The full user is re-loaded from the database on every request.
"""

from dataclasses import dataclass
from datetime import datetime, timezone

from flask import current_app, session
from flask_login import login_user, logout_user

from extensions import db

ISSUED_AT_KEY = 'issued_at'


@dataclass(frozen=True)
class SessionIdentity:
    """What the session remembers about the signed-in user"""
    user_id: int
    issued_at: datetime

    def is_expired(self, lifetime, now=None):
        now = now or datetime.now(timezone.utc)
        return now - self.issued_at >= lifetime

    @classmethod
    def from_session(cls, user_id):
        """Rebuild the identity from the current Flask session, or None if incomplete"""
        issued_at = session.get(ISSUED_AT_KEY)
        if issued_at is None:
            return None
        try:
            return cls(
                user_id=int(user_id),
                issued_at=datetime.fromtimestamp(float(issued_at), tz=timezone.utc)
            )
        except (TypeError, ValueError, OverflowError):
            return None


def start_session(user):
    """
    Sign the user in: Flask-Login stores the id, we add the issue time.
    The cookie expires PERMANENT_SESSION_LIFETIME after this call.
    """
    login_user(user)
    session.permanent = True
    session[ISSUED_AT_KEY] = datetime.now(timezone.utc).timestamp()
    current_app.logger.info("Session started for user %s", user.id)


def end_session():
    """Sign the current user out and drop everything in the session"""
    logout_user()
    session.clear()


def load_session_user(user_id):
    """
    Flask-Login user loader.
    Returns None (anonymous) when the session is missing its issue time or has expired.
    """
    from models import User

    identity = SessionIdentity.from_session(user_id)
    if identity is None:
        return None

    if identity.is_expired(current_app.config['PERMANENT_SESSION_LIFETIME']):
        current_app.logger.info("Session for user %s expired", identity.user_id)
        session.clear()
        return None

    return db.session.get(User, identity.user_id)
