"""
    fastapi_oauth_server.rfc6749.grants
    ~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~

    Implementation for `Section 4`_ of "Obtaining Authorization" and
    `Section 6`_ of "Refreshing an Access Token".

    .. _`Section 4`: https://tools.ietf.org/html/rfc6749#section-4
    .. _`Section 6`: https://tools.ietf.org/html/rfc6749#section-6
"""
from .authorization_code import AuthorizationCodeGrant
from .base import AuthorizationEndpointMixin, AuthorizeRequest, BaseGrant
from .client_credentials import ClientCredentialsGrant
from .implicit import ImplicitGrant
from .refresh_token import RefreshTokenGrant
from .resource_owner_password_credentials import ResourceOwnerPasswordCredentialsGrant

__all__ = [
    'BaseGrant', 'AuthorizationEndpointMixin', 'AuthorizeRequest',
    'AuthorizationCodeGrant',
    'ImplicitGrant',
    'ResourceOwnerPasswordCredentialsGrant',
    'ClientCredentialsGrant',
    'RefreshTokenGrant',
]
