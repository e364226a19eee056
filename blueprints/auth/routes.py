"""
blueprints/auth/routes.py - Authentication Blueprint
Handles registration, email/password login, Google sign-in and logout.
"""

from flask import Blueprint, render_template, redirect, url_for, flash, request, current_app
from flask_login import current_user
from sqlalchemy.exc import IntegrityError
from extensions import db, oauth
from models import User
from passwords import hash_password
from sessions import start_session, end_session
from blueprints.auth.strategies import authenticate_local, authenticate_federated, fetch_google_profile

# Create blueprint
auth_bp = Blueprint('auth', __name__)


def _safe_next(target):
    """Only follow local redirect targets"""
    if target and target.startswith('/') and not target.startswith('//'):
        return target
    return None


@auth_bp.route('/login', methods=['GET', 'POST'])
def login():
    """
    Email/password login
    Failed attempts go back to the login page without saying which part was wrong
    """
    if request.method == 'POST':
        email = request.form.get('email', '').strip()
        password = request.form.get('password', '')

        if not email or not password:
            flash('Please enter both email and password.', 'danger')
            return redirect(url_for('auth.login'))

        # AuthenticationError (database down) is left to the 500 handler
        result = authenticate_local(email, password)

        if not result.ok:
            current_app.logger.info("Failed login for %s: %s", email, result.reason)
            flash('Invalid email or password.', 'danger')
            return redirect(url_for('auth.login'))

        start_session(result.user)
        flash(f'Welcome back, {result.user.firstname or result.user.email}!', 'success')

        next_page = _safe_next(request.args.get('next'))
        return redirect(next_page) if next_page else redirect(url_for('shop.index'))

    # GET request - show login form
    return render_template('login.html')


@auth_bp.route('/register', methods=['GET', 'POST'])
def register():
    """
    Create a local account and sign it in
    An email that is already registered is sent to the login page instead
    """
    if request.method == 'POST':
        first_name = request.form.get('firstname', '').strip()
        last_name = request.form.get('lastname', '').strip()
        email = request.form.get('email', '').strip()
        password = request.form.get('password', '')

        if not email or not password:
            flash('Please enter both email and password.', 'danger')
            return redirect(url_for('auth.register'))

        if User.find_by_email(email) is not None:
            flash('That email is already registered. Please log in.', 'info')
            return redirect(url_for('auth.login'))

        user = User(
            email=email,
            password=hash_password(password),
            photo_path=current_app.config['DEFAULT_PHOTO_URL'],
            firstname=first_name or None,
            lastname=last_name or None
        )

        try:
            db.session.add(user)
            db.session.commit()
        except IntegrityError:
            # Same email registered by a concurrent request
            db.session.rollback()
            flash('That email is already registered. Please log in.', 'info')
            return redirect(url_for('auth.login'))

        current_app.logger.info("Registered user %s", email)
        start_session(user)
        return redirect(url_for('shop.index'))

    # GET request - show registration form
    return render_template('register.html')


@auth_bp.route('/logout')
def logout():
    """
    Logout current user
    """
    if current_user.is_authenticated:
        current_app.logger.info("User %s logged out", current_user.id)
    end_session()
    return redirect(url_for('shop.index'))


@auth_bp.route('/auth/google')
def google_login():
    """
    Send the browser to Google's consent screen
    """
    redirect_uri = url_for('auth.google_callback', _external=True)
    return oauth.google.authorize_redirect(redirect_uri)


@auth_bp.route('/auth/google/furryfriends')
def google_callback():
    """
    Google redirects here with the authorization code
    """
    profile = fetch_google_profile()
    if profile is None:
        flash('Google sign-in failed. Please try again.', 'danger')
        return redirect(url_for('auth.login'))

    result = authenticate_federated(profile)
    if not result.ok:
        current_app.logger.info("Google sign-in rejected: %s", result.reason)
        flash('Google sign-in failed. Please try again.', 'danger')
        return redirect(url_for('auth.login'))

    start_session(result.user)
    return redirect(url_for('shop.index'))
