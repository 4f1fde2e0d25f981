"""
Flask Application Factory

This module implements the application factory pattern for creating
HousePlanFiles API instances with different configurations.
"""

import logging
import os
import sys

from flask import Flask, jsonify, request
from sqlalchemy import inspect
from sqlalchemy.exc import SQLAlchemyError
from werkzeug.exceptions import HTTPException
from werkzeug.middleware.proxy_fix import ProxyFix

from houseplanfiles.config import config
from houseplanfiles.extensions import db, limiter, login_manager, mail, migrate


def _safe_log(app, level: str, message: str, *args, **kwargs) -> None:
    """Log without risking startup due to logger misconfiguration."""
    try:
        getattr(app.logger, level)(message, *args, **kwargs)
    except (AttributeError, ValueError, TypeError):
        print(f"[{level.upper()}] {message % args if args else message}", file=sys.stderr)


def _check_schema(app) -> None:
    """Non-fatal startup check that migrations have created every table.

    Never creates, alters or drops anything; run ``flask db upgrade`` instead.
    """
    if os.environ.get('SKIP_STARTUP_DB_TASKS') == '1':
        _safe_log(app, 'warning', 'Skipping startup DB tasks due to SKIP_STARTUP_DB_TASKS=1')
        return

    with app.app_context():
        try:
            existing = set(inspect(db.engine).get_table_names())
        except SQLAlchemyError as exc:
            _safe_log(app, 'error', 'Database connectivity check failed (continuing): %s', exc)
            return
        finally:
            db.session.remove()

        missing = sorted(set(db.metadata.tables) - existing)
        if missing:
            _safe_log(
                app,
                'warning',
                'Schema appears incomplete. Missing tables: %s. Run "flask db upgrade".',
                ', '.join(missing),
            )
        else:
            _safe_log(app, 'info', 'All required tables present (%d)', len(db.metadata.tables))


def create_app(config_name='default', overrides=None):
    """
    Application factory function

    Args:
        config_name (str): Configuration name ('development', 'production', 'testing')
        overrides (dict): Extra settings applied after the configuration class

    Returns:
        Flask: Configured Flask application instance
    """

    config_name = (config_name or 'default').lower()
    app = Flask(__name__)

    # Instantiate so @property values (ProductionConfig.SQLALCHEMY_DATABASE_URI) resolve.
    cfg = config.get(config_name) or config['default']
    app.config.from_object(cfg() if isinstance(cfg, type) else cfg)
    if overrides:
        app.config.update(overrides)

    app.logger.setLevel(getattr(logging, str(app.config.get('LOG_LEVEL', 'INFO')).upper(), logging.INFO))

    if config_name == 'production':
        if not app.config.get('SECRET_KEY'):
            app.logger.error('Production requires SECRET_KEY to be set via environment variable')
            raise RuntimeError('Missing SECRET_KEY in production')

        db_uri = app.config.get('SQLALCHEMY_DATABASE_URI')
        if not db_uri:
            app.logger.error('Production requires DATABASE_URL (SQLALCHEMY_DATABASE_URI) to be set')
            raise RuntimeError('Missing DATABASE_URL in production')
        if db_uri.strip().startswith('sqlite:'):
            app.logger.error('Production requires PostgreSQL (DATABASE_URL must not be sqlite): %s', db_uri)
            raise RuntimeError('SQLite not allowed in production')
    elif not app.config.get('SECRET_KEY'):
        app.config['SECRET_KEY'] = os.urandom(32).hex()
        app.logger.warning('SECRET_KEY was missing; generated an ephemeral key for this process.')

    proxy_hops = int(app.config.get('PROXY_FIX_X_FOR') or 0)
    if proxy_hops > 0:
        app.wsgi_app = ProxyFix(app.wsgi_app, x_for=proxy_hops, x_proto=proxy_hops)

    os.makedirs(app.config['UPLOAD_FOLDER'], exist_ok=True)

    # Initialize extensions
    db.init_app(app)
    migrate.init_app(app, db)
    login_manager.init_app(app)
    mail.init_app(app)
    limiter.init_app(app)

    # Registers the Flask-Login request loader and unauthorized handler.
    from houseplanfiles import auth  # noqa: F401

    register_blueprints(app)
    register_error_handlers(app)
    register_shell_context(app)
    register_cli_commands(app)
    register_request_hooks(app)

    if not app.config.get('TESTING'):
        _check_schema(app)

    return app


def register_blueprints(app):
    """Register Flask blueprints"""

    from houseplanfiles.routes.blog import blog_bp
    from houseplanfiles.routes.contractors import contractors_bp
    from houseplanfiles.routes.currency import currency_bp
    from houseplanfiles.routes.customization import customization_bp
    from houseplanfiles.routes.gallery import gallery_bp
    from houseplanfiles.routes.health import health_bp
    from houseplanfiles.routes.marketplace import marketplace_bp
    from houseplanfiles.routes.packages import packages_bp
    from houseplanfiles.routes.products import products_bp
    from houseplanfiles.routes.share import share_bp
    from houseplanfiles.routes.site import site_bp
    from houseplanfiles.routes.users import users_bp
    from houseplanfiles.routes.voice import voice_bp

    app.register_blueprint(users_bp, url_prefix='/api/users')
    app.register_blueprint(products_bp, url_prefix='/api/products')
    app.register_blueprint(packages_bp, url_prefix='/api/packages')
    app.register_blueprint(currency_bp, url_prefix='/api/currency')
    app.register_blueprint(gallery_bp, url_prefix='/api/gallery')
    app.register_blueprint(voice_bp, url_prefix='/api/voice')
    app.register_blueprint(customization_bp, url_prefix='/api/customization-requests')
    app.register_blueprint(contractors_bp, url_prefix='/api/contractors')
    app.register_blueprint(marketplace_bp, url_prefix='/api/seller-products')
    app.register_blueprint(blog_bp, url_prefix='/api/blogs')
    app.register_blueprint(site_bp)
    app.register_blueprint(share_bp)
    app.register_blueprint(health_bp)  # No prefix - accessible at /health


def register_error_handlers(app):
    """Answer every HTTP error with a JSON ``{message}`` body."""

    @app.errorhandler(HTTPException)
    def http_error(error):
        return jsonify({'message': error.description}), error.code

    @app.errorhandler(500)
    def internal_error(error):
        original = getattr(error, 'original_exception', None)
        if original is None:
            # Explicit abort(500, description=...) from a handler that already logged.
            return jsonify({'message': error.description}), 500
        app.logger.exception('Unhandled exception (500): %s', original)
        db.session.rollback()
        return jsonify({'message': 'Internal server error'}), 500


def register_shell_context(app):
    """Register shell context for Flask CLI"""

    @app.shell_context_processor
    def make_shell_context():
        from houseplanfiles import models
        return {
            'db': db,
            'User': models.User,
            'Product': models.Product,
            'Package': models.Package,
            'Order': models.Order,
            'Contractor': models.Contractor,
            'SellerProduct': models.SellerProduct,
            'BlogPost': models.BlogPost,
            'ContactMessage': models.ContactMessage,
        }


def register_cli_commands(app):
    """Register custom Flask CLI commands."""
    from houseplanfiles.cli import create_admin_command, seed_packages_command

    app.cli.add_command(create_admin_command)
    app.cli.add_command(seed_packages_command)


def register_request_hooks(app):
    """CORS and security headers, plus session cleanup after every request."""

    @app.after_request
    def _apply_cors_headers(response):
        origin = request.headers.get('Origin')
        if origin and origin in app.config.get('CORS_ORIGINS', []):
            response.headers['Access-Control-Allow-Origin'] = origin
            response.headers['Access-Control-Allow-Credentials'] = 'true'
            response.headers.add('Vary', 'Origin')
            if request.method == 'OPTIONS':
                response.headers['Access-Control-Allow-Headers'] = 'Authorization, Content-Type'
                response.headers['Access-Control-Allow-Methods'] = 'GET, POST, PUT, DELETE, OPTIONS'
                response.headers['Access-Control-Max-Age'] = '600'
        return response

    @app.after_request
    def _apply_security_headers(response):
        if response.mimetype == 'application/json':
            response.headers.setdefault('Content-Security-Policy', "default-src 'none'; frame-ancestors 'none'")
        response.headers.setdefault('X-Content-Type-Options', 'nosniff')
        response.headers.setdefault('Referrer-Policy', 'strict-origin-when-cross-origin')
        return response

    @app.teardown_request
    def _cleanup_sessions(exc):
        """Guarantee DB sessions are rolled back and removed every request."""
        if exc is not None:
            try:
                db.session.rollback()
            except SQLAlchemyError as rollback_exc:
                app.logger.error('Rollback during teardown failed: %s', rollback_exc, exc_info=True)
        db.session.remove()
