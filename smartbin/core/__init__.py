from .app import create_app, db, limiter, get_services

__all__ = ['create_app', 'db', 'limiter', 'get_services']
