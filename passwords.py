"""
passwords.py - Password hashing and verification
Thin wrapper around Flask-Bcrypt. Hash at registration, verify at login.
"""

from flask import current_app
from extensions import bcrypt


def hash_password(plaintext):
    """
    Hash a plaintext password with bcrypt (cost from BCRYPT_LOG_ROUNDS)

    Returns:
        str: the encoded hash, ready to store in users.password
    """
    return bcrypt.generate_password_hash(plaintext).decode('utf-8')


def verify_password(plaintext, hashed):
    """
    Check a plaintext password against a stored bcrypt hash.
    Never raises: a malformed hash (such as the Google sentinel) counts as a mismatch.
    """
    if not plaintext or not hashed:
        return False

    try:
        return bcrypt.check_password_hash(hashed, plaintext)
    except ValueError as e:
        current_app.logger.warning("Password verification failed: %s", e)
        return False
