from dataclasses import dataclass

from ..rfc6749.wrappers import OAuth2Request
from .setting import OAuthSetting


@dataclass(frozen=True)
class OAuthContext:
    # OAuth Request
    request: OAuth2Request

    # Configuration captured when the request was dispatched
    config: OAuthSetting
