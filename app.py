"""
app.py - Application Factory
Entry point for the FurryFriends storefront.
Uses the Application Factory pattern for modularity and testing.
"""

from flask import Flask, render_template
from sqlalchemy.exc import SQLAlchemyError
from config import config
from extensions import db, migrate, login_manager, bcrypt, oauth


def create_app(config_name='development'):
    """
    Application Factory Function

    Args:
        config_name (str): Configuration to use ('development', 'production', 'testing')

    Returns:
        Flask: Configured Flask application instance
    """
    app = Flask(__name__, static_folder='public', static_url_path='')

    # Load configuration from config.py based on environment
    app.config.from_object(config[config_name])
    config[config_name].init_app(app)

    # Initialize extensions with the app
    db.init_app(app)
    migrate.init_app(app, db)
    login_manager.init_app(app)
    bcrypt.init_app(app)
    oauth.init_app(app)

    # Configure Flask-Login
    login_manager.login_view = 'auth.login'  # /checkout redirects here when anonymous
    login_manager.login_message = 'Please log in to access this page.'
    login_manager.login_message_category = 'info'

    # User loader callback for Flask-Login
    from sessions import load_session_user
    login_manager.user_loader(load_session_user)

    register_oauth_clients(app)

    # Register blueprints (routes)
    register_blueprints(app)

    # Register error handlers
    register_error_handlers(app)

    # Import models so Flask-Migrate can detect them
    with app.app_context():
        import models  # noqa: F401

    return app


def register_oauth_clients(app):
    """
    Register the Google OpenID Connect client
    """
    oauth.register(
        name='google',
        client_id=app.config['GOOGLE_CLIENT_ID'],
        client_secret=app.config['GOOGLE_CLIENT_SECRET'],
        server_metadata_url=app.config['GOOGLE_DISCOVERY_URL'],
        client_kwargs={'scope': 'openid email profile'}
    )


def register_blueprints(app):
    """
    Register all application blueprints (modular route handlers)
    """
    from blueprints.auth.routes import auth_bp
    from blueprints.shop.routes import shop_bp

    # Both blueprints own root-level paths (/login, /dogs, /auth/google, ...)
    app.register_blueprint(auth_bp)
    app.register_blueprint(shop_bp)


def register_error_handlers(app):
    """
    Register custom error handlers for common HTTP errors
    """
    from blueprints.auth.strategies import AuthenticationError

    @app.errorhandler(404)
    def not_found(error):
        return render_template('errors/404.html'), 404

    @app.errorhandler(500)
    def internal_error(error):
        db.session.rollback()  # Rollback any failed database transactions
        return render_template('errors/500.html'), 500

    @app.errorhandler(SQLAlchemyError)
    @app.errorhandler(AuthenticationError)
    def database_error(error):
        db.session.rollback()
        app.logger.exception("Database error: %s", error)
        return render_template('errors/500.html'), 500


def dispose_engine(app):
    """
    Close every pooled database connection (call on shutdown)
    """
    with app.app_context():
        db.session.remove()
        db.engine.dispose()


# Run the application
if __name__ == '__main__':
    app = create_app('development')

    try:
        app.run(
            host='0.0.0.0',
            port=3000,
            debug=True
        )
    finally:
        dispose_engine(app)
