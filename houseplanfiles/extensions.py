"""
Flask Extensions Module

Extensions are created here and attached to the app in the factory.
"""

from flask_sqlalchemy import SQLAlchemy
from flask_migrate import Migrate
from flask_login import LoginManager
from flask_mail import Mail
from flask_limiter import Limiter
from flask_limiter.util import get_remote_address


db = SQLAlchemy()
migrate = Migrate()
login_manager = LoginManager()
mail = Mail()
# Keyed on remote_addr; create_app installs ProxyFix for the configured
# number of trusted proxy hops so forwarded headers cannot pick the key.
limiter = Limiter(key_func=get_remote_address)

# Token-only API: no redirects, no session cookie protection.
login_manager.session_protection = None
