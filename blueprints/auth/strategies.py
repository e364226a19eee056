"""
blueprints/auth/strategies.py - Authentication Strategies
Local (email + password) and Google sign-in. Each strategy returns an AuthResult;
database failures raise AuthenticationError so callers can tell them apart
from a wrong password.
"""

from dataclasses import dataclass
from typing import Optional

import requests
from authlib.integrations.base_client import OAuthError
from flask import current_app
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from extensions import db, oauth
from models import User
from passwords import verify_password


class AuthenticationError(Exception):
    """The credential store could not be queried"""


@dataclass(frozen=True)
class AuthResult:
    """Outcome of a sign-in attempt: the user on success, a reason on failure"""

    user: Optional[User] = None
    reason: Optional[str] = None

    @property
    def ok(self):
        """True when a user was authenticated"""
        return self.user is not None

    @classmethod
    def success(cls, user):
        """Successful sign-in for user"""
        return cls(user=user)

    @classmethod
    def failure(cls, reason='invalid credentials'):
        """Failed sign-in; reason is logged, never shown"""
        return cls(reason=reason)


def authenticate_local(email, password):
    """
    Verify an email/password pair against the users table.

    Returns:
        AuthResult: success with the user, or failure on unknown email / wrong password

    Raises:
        AuthenticationError: the lookup itself failed
    """
    try:
        user = User.find_by_email(email)
    except SQLAlchemyError as e:
        current_app.logger.exception("Error finding user %s", email)
        raise AuthenticationError(str(e)) from e

    if user is None:
        return AuthResult.failure('unknown email')

    if not verify_password(password, user.password):
        return AuthResult.failure('password mismatch')

    return AuthResult.success(user)


def authenticate_federated(profile):
    """
    Find or create the user behind a Google profile.

    Args:
        profile: userinfo claims with email, given_name, family_name, picture

    Returns:
        AuthResult: the existing user unchanged, or a newly inserted one

    Raises:
        AuthenticationError: the lookup or insert failed
    """
    email = (profile or {}).get('email')
    if not email:
        return AuthResult.failure('profile has no email')

    try:
        user = User.find_by_email(email)
        if user is not None:
            return AuthResult.success(user)

        user = User(
            email=email,
            password=current_app.config['FEDERATED_PASSWORD_SENTINEL'],
            photo_path=profile.get('picture'),
            firstname=profile.get('given_name'),
            lastname=profile.get('family_name')
        )
        db.session.add(user)
        db.session.commit()
    except IntegrityError:
        # Another request created the same email first
        db.session.rollback()
        existing = User.find_by_email(email)
        if existing is None:
            raise AuthenticationError(f"could not create user {email}")
        return AuthResult.success(existing)
    except SQLAlchemyError as e:
        db.session.rollback()
        current_app.logger.exception("Error creating Google user %s", email)
        raise AuthenticationError(str(e)) from e

    current_app.logger.info("Created Google account for %s", email)
    return AuthResult.success(user)


def fetch_google_profile():
    """
    Exchange the authorization code on the current callback request for the
    user's Google profile. Returns None if Google rejected the exchange.
    """
    try:
        token = oauth.google.authorize_access_token()
    except OAuthError as e:
        current_app.logger.warning("Google sign-in failed: %s", e.description or e.error)
        return None

    profile = token.get('userinfo')
    if not profile:
        try:
            resp = oauth.google.get(current_app.config['GOOGLE_USERINFO_URL'], token=token)
            resp.raise_for_status()
            profile = resp.json()
        except (requests.RequestException, ValueError) as e:
            current_app.logger.warning("Could not fetch Google profile: %s", e)
            return None

    return dict(profile)
