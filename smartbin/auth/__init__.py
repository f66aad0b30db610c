from .auth import (AuthService, Identity, create_auth_token, verify_auth_token,
                   require_token, require_admin_if_configured)

__all__ = ['AuthService', 'Identity', 'create_auth_token', 'verify_auth_token',
           'require_token', 'require_admin_if_configured']
