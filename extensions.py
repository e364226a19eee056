"""
extensions.py - Flask Extensions
Initialize Flask extensions here to avoid circular imports.
Extensions are created here but initialized in app.py with init_app().
"""

from flask_sqlalchemy import SQLAlchemy
from flask_migrate import Migrate
from flask_login import LoginManager
from flask_bcrypt import Bcrypt
from authlib.integrations.flask_client import OAuth

# Database ORM for the users, dog, sale and testimonials tables
db = SQLAlchemy()

# Database Migration Tool
# Usage: flask db init, flask db migrate, flask db upgrade
migrate = Migrate()

# User Session Management
# Stores only the user id in the session; the user is re-loaded per request
login_manager = LoginManager()

# Password Hashing (cost factor comes from BCRYPT_LOG_ROUNDS)
bcrypt = Bcrypt()

# Google sign-in
# The 'google' client is registered in app.py once the config is loaded
oauth = OAuth()
