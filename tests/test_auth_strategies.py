"""Tests for the local and Google authentication strategies."""

import json

import pytest
import requests
from authlib.integrations.base_client import OAuthError
from sqlalchemy.exc import OperationalError

from blueprints.auth.strategies import (
    AuthenticationError,
    authenticate_federated,
    authenticate_local,
    fetch_google_profile,
)
from extensions import db, oauth
from models import User

GOOGLE_PROFILE = {
    'email': 'jane@gmail.com',
    'given_name': 'Jane',
    'family_name': 'Doe',
    'picture': 'https://lh3.googleusercontent.com/a/jane.png',
}


def _raise_db_down(cls, email):
    raise OperationalError('SELECT', {}, Exception('database is down'))


def test_local_success_returns_user(app, make_user) -> None:
    user_id = make_user(email='owner@example.com', password='s3cret-pass')

    with app.app_context():
        result = authenticate_local('owner@example.com', 's3cret-pass')

        assert result.ok
        assert result.user.id == user_id


def test_local_unknown_email_fails(app) -> None:
    with app.app_context():
        result = authenticate_local('nobody@example.com', 's3cret-pass')

    assert not result.ok
    assert result.reason == 'unknown email'


def test_local_wrong_password_fails(app, make_user) -> None:
    make_user(email='owner@example.com', password='s3cret-pass')

    with app.app_context():
        result = authenticate_local('owner@example.com', 'wrong-pass')

    assert not result.ok
    assert result.reason == 'password mismatch'


def test_local_email_match_is_case_sensitive(app, make_user) -> None:
    make_user(email='owner@example.com')

    with app.app_context():
        assert not authenticate_local('Owner@Example.com', 's3cret-pass').ok


def test_local_login_rejected_for_google_account(app) -> None:
    with app.app_context():
        authenticate_federated(GOOGLE_PROFILE)

        result = authenticate_local('jane@gmail.com', 'google')

    assert not result.ok


def test_local_database_error_is_not_a_mismatch(app, monkeypatch) -> None:
    monkeypatch.setattr(User, 'find_by_email', classmethod(_raise_db_down))

    with app.app_context():
        with pytest.raises(AuthenticationError):
            authenticate_local('owner@example.com', 's3cret-pass')


def test_federated_creates_user_for_new_email(app) -> None:
    with app.app_context():
        result = authenticate_federated(GOOGLE_PROFILE)

        assert result.ok
        users = User.query.filter_by(email='jane@gmail.com').all()
        assert len(users) == 1
        user = users[0]
        assert user.photo_path == GOOGLE_PROFILE['picture']
        assert user.firstname == 'Jane'
        assert user.lastname == 'Doe'
        assert user.password == 'google'
        assert user.is_federated


def test_federated_returns_existing_user_unchanged(app, make_user) -> None:
    user_id = make_user(email='jane@gmail.com', firstname='Janet', photo_path='/assets/images/me.jpg')

    with app.app_context():
        result = authenticate_federated(GOOGLE_PROFILE)

        assert result.user.id == user_id
        assert result.user.firstname == 'Janet'
        assert result.user.photo_path == '/assets/images/me.jpg'
        assert not result.user.is_federated
        assert User.query.filter_by(email='jane@gmail.com').count() == 1


def test_federated_repeat_login_does_not_duplicate(app) -> None:
    with app.app_context():
        first = authenticate_federated(GOOGLE_PROFILE)
        first_id = first.user.id
        second = authenticate_federated(dict(GOOGLE_PROFILE, picture='https://example.com/new.png'))

        assert second.user.id == first_id
        assert second.user.photo_path == GOOGLE_PROFILE['picture']
        assert User.query.count() == 1


def test_federated_profile_without_email_fails(app) -> None:
    with app.app_context():
        result = authenticate_federated({'given_name': 'Nobody'})

        assert not result.ok
        assert User.query.count() == 0


def test_federated_database_error_raises(app, monkeypatch) -> None:
    monkeypatch.setattr(User, 'find_by_email', classmethod(_raise_db_down))

    with app.app_context():
        with pytest.raises(AuthenticationError):
            authenticate_federated(GOOGLE_PROFILE)
        db.session.rollback()


CALLBACK_URL = '/auth/google/furryfriends?code=abc&state=xyz'
USERINFO_URL = 'https://www.googleapis.com/oauth2/v3/userinfo'


def _userinfo_response(status_code, body):
    response = requests.Response()
    response.status_code = status_code
    response.url = USERINFO_URL
    response._content = body
    return response


def test_fetch_profile_uses_userinfo_claims(app, monkeypatch) -> None:
    token = {'access_token': 'at', 'userinfo': dict(GOOGLE_PROFILE)}

    with app.test_request_context(CALLBACK_URL):
        monkeypatch.setattr(oauth.google, 'authorize_access_token', lambda: token)
        monkeypatch.setattr(oauth.google, 'get', lambda *args, **kwargs: pytest.fail('userinfo endpoint called'))

        assert fetch_google_profile() == GOOGLE_PROFILE


def test_fetch_profile_rejected_exchange_returns_none(app, monkeypatch) -> None:
    def _deny():
        raise OAuthError(error='access_denied', description='User denied access')

    with app.test_request_context(CALLBACK_URL):
        monkeypatch.setattr(oauth.google, 'authorize_access_token', _deny)

        assert fetch_google_profile() is None


def test_fetch_profile_falls_back_to_userinfo_endpoint(app, monkeypatch) -> None:
    token = {'access_token': 'at'}
    calls = []

    def fake_get(url, token=None, **kwargs):
        calls.append((url, token))
        return _userinfo_response(200, json.dumps(GOOGLE_PROFILE).encode())

    with app.test_request_context(CALLBACK_URL):
        monkeypatch.setattr(oauth.google, 'authorize_access_token', lambda: token)
        monkeypatch.setattr(oauth.google, 'get', fake_get)

        assert fetch_google_profile() == GOOGLE_PROFILE

    assert calls == [(USERINFO_URL, token)]


def test_fetch_profile_userinfo_failures_return_none(app, monkeypatch) -> None:
    responses = [
        _userinfo_response(500, b'{"error": "backend"}'),
        _userinfo_response(200, b'<html>not json</html>'),
    ]

    def fake_get(url, token=None, **kwargs):
        if not responses:
            raise requests.ConnectionError('connection reset')
        return responses.pop(0)

    with app.test_request_context(CALLBACK_URL):
        monkeypatch.setattr(oauth.google, 'authorize_access_token', lambda: {'access_token': 'at'})
        monkeypatch.setattr(oauth.google, 'get', fake_get)

        assert fetch_google_profile() is None  # HTTP 500
        assert fetch_google_profile() is None  # body is not JSON
        assert fetch_google_profile() is None  # network error
