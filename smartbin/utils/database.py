"""
Database utilities for health checks.
"""

import logging
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from ..core.app import db


def check_database_health():
    """Check database connection and basic functionality"""
    try:
        result = db.session.execute(text('SELECT 1'))
        result.fetchone()

        return True, "Database connection healthy"
    except SQLAlchemyError as e:
        db.session.rollback()
        logging.error(f"Database health check failed: {str(e)}")
        return False, f"Database error: {str(e)}"
