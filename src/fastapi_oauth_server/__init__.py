from .common.setting import OAuthSetting
from .provider.authorization_server import AuthorizationServer
from .rfc6749 import (
    AuthorizationCodeGrant,
    ClientCredentialsGrant,
    ImplicitGrant,
    OAuth2Request,
    OAuth2Token,
    RefreshTokenGrant,
    ResourceOwnerPasswordCredentialsGrant,
    StorageRegistry,
)
from .sqla_oauth2 import (
    OAuth2AccessTokenBase,
    OAuth2AuthorizationCodeBase,
    OAuth2ClientBase,
    OAuth2RefreshTokenBase,
    OAuth2ScopeBase,
    OAuth2SessionBase,
    SQLAAccessTokenStorage,
    SQLAAuthCodeStorage,
    SQLAClientStorage,
    SQLARefreshTokenStorage,
    SQLAScopeStorage,
    SQLASessionStorage,
)
from .utils.consts import name, version

__version__ = version
