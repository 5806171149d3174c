from .models import (
    OAuth2AccessTokenBase,
    OAuth2AuthorizationCodeBase,
    OAuth2ClientBase,
    OAuth2RefreshTokenBase,
    OAuth2ScopeBase,
    OAuth2SessionBase,
)
from .storage import (
    SQLAAccessTokenStorage,
    SQLAAuthCodeStorage,
    SQLAClientStorage,
    SQLARefreshTokenStorage,
    SQLAScopeStorage,
    SQLASessionStorage,
)

__all__ = [
    'OAuth2ClientBase',
    'OAuth2SessionBase',
    'OAuth2AccessTokenBase',
    'OAuth2RefreshTokenBase',
    'OAuth2AuthorizationCodeBase',
    'OAuth2ScopeBase',
    'SQLAClientStorage',
    'SQLASessionStorage',
    'SQLAAccessTokenStorage',
    'SQLARefreshTokenStorage',
    'SQLAAuthCodeStorage',
    'SQLAScopeStorage',
]
