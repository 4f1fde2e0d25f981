"""
WSGI Entry Point for the HousePlanFiles API

This module serves as the entry point for WSGI servers (like Gunicorn)
to run the Flask application in production environments.
"""

import os
import sys

# Load .env only for local development. In production the platform provides
# the environment.
if os.environ.get('FLASK_ENV', '').lower() != 'production' and os.environ.get('FLASK_CONFIG', '').lower() != 'production':
    from dotenv import load_dotenv

    load_dotenv(override=False)

from houseplanfiles import create_app  # noqa: E402

config_name = (os.getenv('FLASK_CONFIG') or os.getenv('FLASK_ENV') or 'development').lower()

if config_name == 'production':
    required_vars = {
        'SECRET_KEY': 'Required for signing bearer tokens',
        'DATABASE_URL': 'Required for PostgreSQL connection',
        'ADMIN_EMAIL': 'Required for lead notifications',
    }
    missing_vars = [f"  {name}: {why}" for name, why in required_vars.items() if not os.getenv(name)]
    if missing_vars:
        print('Missing required environment variables:\n' + '\n'.join(missing_vars), file=sys.stderr)
        raise RuntimeError('Missing required environment variables in production')

app = create_app(config_name)
