"""
    This module represents a direct implementation of
    The OAuth 2.0 Authorization Framework.

    https://tools.ietf.org/html/rfc6749
"""
from .authenticate_client import ClientAuthentication
from .authorization_server import AuthorizationServer
from .errors import (
    ERROR_MESSAGES,
    ERROR_STATUS_CODES,
    ERROR_SUB_CODES,
    AccessDeniedError,
    ClientError,
    ErrorKind,
    InvalidClientError,
    InvalidCredentialsError,
    InvalidGrantError,
    InvalidRefreshError,
    InvalidRequestError,
    InvalidScopeError,
    OAuth2Error,
    ServerError,
    TemporarilyUnavailableError,
    UnauthorizedClientError,
    UnsupportedGrantTypeError,
    UnsupportedResponseTypeError,
    derive_http_headers,
    format_error_message,
)
from .grants import (
    AuthorizationCodeGrant,
    AuthorizeRequest,
    BaseGrant,
    ClientCredentialsGrant,
    ImplicitGrant,
    RefreshTokenGrant,
    ResourceOwnerPasswordCredentialsGrant,
)
from .mixins import (
    AccessTokenMixin,
    AuthorizationCodeMixin,
    ClientMixin,
    RefreshTokenMixin,
    ScopeMixin,
    SessionMixin,
)
from .storage import (
    AccessTokenStorage,
    AuthCodeStorage,
    ClientStorage,
    RefreshTokenStorage,
    ScopeStorage,
    SessionStorage,
    StorageRegistry,
)
from .util import list_to_scope, scope_to_list
from .wrappers import OAuth2Request, OAuth2Token

__all__ = [
    'OAuth2Request', 'OAuth2Token',
    'ErrorKind', 'ERROR_MESSAGES', 'ERROR_STATUS_CODES', 'ERROR_SUB_CODES',
    'format_error_message', 'derive_http_headers',
    'OAuth2Error', 'ClientError', 'ServerError',
    'AccessDeniedError',
    'InvalidClientError',
    'InvalidCredentialsError',
    'InvalidGrantError',
    'InvalidRefreshError',
    'InvalidRequestError',
    'InvalidScopeError',
    'TemporarilyUnavailableError',
    'UnauthorizedClientError',
    'UnsupportedResponseTypeError',
    'UnsupportedGrantTypeError',
    'ClientMixin', 'SessionMixin', 'AccessTokenMixin', 'RefreshTokenMixin',
    'AuthorizationCodeMixin', 'ScopeMixin',
    'ClientStorage', 'SessionStorage', 'AccessTokenStorage', 'RefreshTokenStorage',
    'AuthCodeStorage', 'ScopeStorage', 'StorageRegistry',
    'BaseGrant', 'AuthorizeRequest',
    'AuthorizationCodeGrant', 'ImplicitGrant', 'ResourceOwnerPasswordCredentialsGrant',
    'ClientCredentialsGrant', 'RefreshTokenGrant',
    'ClientAuthentication',
    'AuthorizationServer',
    'scope_to_list', 'list_to_scope',
]
