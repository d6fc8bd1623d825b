"""Authentication providers.

Available providers:
- LocalJWTAuthProvider: validates hosted-backend access tokens locally
- HeaderAuthProvider: trusts gateway headers (development / behind a gateway)
- DisabledAuthProvider: every request is anonymous
"""

from cookbook.auth.providers.exceptions import (
    AuthenticationError,
    AuthProviderError,
    ConfigurationError,
    TokenExpiredError,
    TokenInvalidError,
)
from cookbook.auth.providers.factory import (
    DisabledAuthProvider,
    create_auth_provider,
    get_auth_provider,
    initialize_auth_provider,
    set_auth_provider,
    shutdown_auth_provider,
)
from cookbook.auth.providers.header import HeaderAuthProvider
from cookbook.auth.providers.local_jwt import LocalJWTAuthProvider
from cookbook.auth.providers.models import AuthResult
from cookbook.auth.providers.protocol import AuthProvider


__all__ = [
    "AuthProvider",
    "AuthProviderError",
    "AuthResult",
    "AuthenticationError",
    "ConfigurationError",
    "DisabledAuthProvider",
    "HeaderAuthProvider",
    "LocalJWTAuthProvider",
    "TokenExpiredError",
    "TokenInvalidError",
    "create_auth_provider",
    "get_auth_provider",
    "initialize_auth_provider",
    "set_auth_provider",
    "shutdown_auth_provider",
]
