"""
Stateless token authentication.

Passwords are stored as salted werkzeug hashes. Login issues an HS256 JWT
carrying the caller's email and role; every protected request presents it in
the ``x-access-token`` header. Verification is structural only (signature and,
when configured, expiry); there is no revocation list, logout simply discards
the token client side.
"""

import logging
import time
from dataclasses import dataclass
from functools import wraps

import jwt
from flask import current_app, g, request
from werkzeug.security import check_password_hash, generate_password_hash

from ..errors import (DuplicateAccount, Forbidden, InvalidCredentials,
                      InvalidRequest, InvalidToken)
from ..models.role import AccountRole
from ..utils.validation import validate_email, validate_name, validate_password

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Identity:
    """Caller identity carried by a verified token"""
    email: str
    role: str

    @property
    def is_admin(self):
        return self.role == AccountRole.ADMIN.value


def create_auth_token(identity, secret_key, algorithm='HS256', expiry_seconds=None):
    """Create a signed JWT for an identity"""
    now = int(time.time())
    payload = {
        'email': identity.email,
        'role': identity.role,
        'iat': now,
    }
    if expiry_seconds:
        payload['exp'] = now + expiry_seconds

    return jwt.encode(payload, secret_key, algorithm=algorithm)


def verify_auth_token(token, secret_key, algorithm='HS256'):
    """Verify and decode a JWT, returning its Identity"""
    if not token:
        raise InvalidToken()
    try:
        payload = jwt.decode(token, secret_key, algorithms=[algorithm])
    except jwt.ExpiredSignatureError:
        logger.info("Token expired")
        raise InvalidToken()
    except jwt.InvalidTokenError:
        logger.info("Invalid token")
        raise InvalidToken()

    email = payload.get('email')
    if not email:
        raise InvalidToken()
    return Identity(email=email, role=payload.get('role', AccountRole.USER.value))


class AuthService:

    def __init__(self, store, secret_key, algorithm='HS256', expiry_seconds=None,
                 password_min_length=1):
        self.store = store
        self.secret_key = secret_key
        self.algorithm = algorithm
        self.expiry_seconds = expiry_seconds
        self.password_min_length = password_min_length

    def register(self, name, email, password, role=AccountRole.USER.value):
        """Create a zero-balance account. Returns the normalised email."""
        for is_valid, message in (validate_name(name),
                                  validate_email(email),
                                  validate_password(password, self.password_min_length)):
            if not is_valid:
                raise InvalidRequest(message)

        email = email.strip().lower()
        record = {
            'name': name.strip(),
            'role': role,
            'passwordHash': generate_password_hash(password),
            'walletBalance': 0,
            'ecoPoints': 0,
        }

        with self.store.atomic():
            if self.store.get(email) is not None:
                raise DuplicateAccount()
            self.store.set(email, record, overwrite=False)

        logger.info(f"Account {email} registered")
        return email

    def login(self, email, password):
        """Check credentials and issue a token. Returns (token, role)."""
        if not isinstance(email, str) or not isinstance(password, str):
            raise InvalidCredentials()

        email = email.strip().lower()
        document = self.store.get(email)

        if document is None or not check_password_hash(document['passwordHash'], password):
            logger.warning(f"Failed login for {email}")
            raise InvalidCredentials()

        identity = Identity(email=email, role=document.get('role', AccountRole.USER.value))
        token = create_auth_token(identity, self.secret_key, self.algorithm, self.expiry_seconds)

        logger.info(f"Account {email} logged in successfully")
        return token, identity.role

    def authenticate(self, token):
        return verify_auth_token(token, self.secret_key, self.algorithm)

    def ensure_admin(self, email, password):
        """Create an admin account unless the email is taken. Returns True if created."""
        try:
            self.register('Administrator', email, password, role=AccountRole.ADMIN.value)
        except DuplicateAccount:
            return False
        return True


def get_request_token():
    """Token from the custom header, falling back to a Bearer Authorization header"""
    token = request.headers.get(current_app.config.get('TOKEN_HEADER', 'x-access-token'))

    if not token:
        auth_header = request.headers.get('Authorization')
        if auth_header and auth_header.startswith('Bearer '):
            token = auth_header[len('Bearer '):]

    return token


def require_token(f):
    """Decorator to require a valid token; stores the caller in ``g.identity``"""
    @wraps(f)
    def decorated_function(*args, **kwargs):
        auth = current_app.extensions['smartbin'].auth
        g.identity = auth.authenticate(get_request_token())
        return f(*args, **kwargs)
    return decorated_function


def require_admin_if_configured(f):
    """Decorator gating admin reads behind an admin token when ADMIN_REQUIRE_AUTH is set"""
    @wraps(f)
    def decorated_function(*args, **kwargs):
        if current_app.config.get('ADMIN_REQUIRE_AUTH'):
            auth = current_app.extensions['smartbin'].auth
            g.identity = auth.authenticate(get_request_token())
            if not g.identity.is_admin:
                raise Forbidden()
        return f(*args, **kwargs)
    return decorated_function
