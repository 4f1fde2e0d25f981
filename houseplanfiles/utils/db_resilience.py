"""
Retry helpers for database operations that may hit transient connection
failures (stale pooled connections after a managed Postgres restart).
"""

import functools
import time

from flask import current_app
from sqlalchemy.exc import DBAPIError, OperationalError

from houseplanfiles.extensions import db


def with_db_resilience(max_retries=2, backoff_ms=100):
    """
    Retry the wrapped callable on OperationalError / DBAPIError.

    Between attempts the session is rolled back, the pool is disposed and the
    wait doubles. The last failure is re-raised.

    Usage:
        @with_db_resilience(max_retries=3, backoff_ms=200)
        def load_user_by_email(email):
            return User.query.filter_by(email=email).first()
    """
    def decorator(func):
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            for attempt in range(max_retries + 1):
                try:
                    return func(*args, **kwargs)
                except (OperationalError, DBAPIError) as exc:
                    db.session.rollback()

                    if attempt >= max_retries:
                        current_app.logger.error(
                            'Database operation failed after %d attempts in %s: %s',
                            max_retries + 1,
                            func.__name__,
                            exc,
                            exc_info=True,
                        )
                        raise

                    db.engine.dispose()
                    current_app.logger.warning(
                        'DB connection pool disposed after error in %s (attempt %d/%d): %s',
                        func.__name__,
                        attempt + 1,
                        max_retries + 1,
                        exc,
                    )
                    if backoff_ms > 0:
                        time.sleep(backoff_ms * (2 ** attempt) / 1000.0)

        return wrapper
    return decorator
