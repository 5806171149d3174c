from typing import Callable, Optional, Union

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from ..utils.consts import (
    DEFAULT_ACCESS_TOKEN_TTL,
    DEFAULT_AUTH_CODE_TTL,
    DEFAULT_REFRESH_TOKEN_TTL,
    DEFAULT_SCOPE_DELIMITER,
)


class OAuthSetting(BaseSettings):
    """Configuration of the authorization server. Values are read from
    ``OAUTH2_*`` environment variables. Instances are immutable, use
    :meth:`replace` to derive a changed copy.
    """
    model_config = SettingsConfigDict(frozen=True)

    """
    OAUTH2_SCOPE_DELIMITER: the delimiter between scopes in the ``scope``
    parameter. RFC 6749 section 3.3 defines a single space, some deployments
    use a comma.
    """
    OAUTH2_SCOPE_DELIMITER: str = DEFAULT_SCOPE_DELIMITER

    #: lifetime in seconds of issued access tokens
    OAUTH2_ACCESS_TOKEN_TTL: int = DEFAULT_ACCESS_TOKEN_TTL
    #: lifetime in seconds of issued refresh tokens
    OAUTH2_REFRESH_TOKEN_TTL: int = DEFAULT_REFRESH_TOKEN_TTL
    #: lifetime in seconds of authorization codes
    OAUTH2_AUTH_CODE_TTL: int = DEFAULT_AUTH_CODE_TTL

    OAUTH2_REQUIRE_SCOPE_PARAM: bool = False
    OAUTH2_REQUIRE_STATE_PARAM: bool = False

    #: scope(s) used when ``scope`` is absent and not required
    OAUTH2_DEFAULT_SCOPE: Optional[str] = None

    """
    OAUTH2_ACCESS_TOKEN_GENERATOR: Boolean, import string or callable, default is True.

    Here are some examples of the token generator::

        OAUTH2_ACCESS_TOKEN_GENERATOR = 'your_project.generators.gen_token'

        # and in module `your_project.generators`, you can define:

        def gen_token(grant_type, client, scope=None, expires_in=None):
            # generate token according to these parameters
            token = create_random_token()
            return f'{client.get_client_id()}-{token}'
    """
    OAUTH2_ACCESS_TOKEN_GENERATOR: Union[bool, str, Callable[..., str]] = True

    """
    OAUTH2_REFRESH_TOKEN_GENERATOR: Boolean, import string or callable, default is True.
    Refresh tokens are only issued when the ``refresh_token`` grant type is
    registered; set it to False to never issue them.
    """
    OAUTH2_REFRESH_TOKEN_GENERATOR: Union[bool, str, Callable[..., str]] = True

    @field_validator('OAUTH2_ACCESS_TOKEN_TTL', 'OAUTH2_REFRESH_TOKEN_TTL', 'OAUTH2_AUTH_CODE_TTL')
    @classmethod
    def check_positive_ttl(cls, value: int) -> int:
        if value <= 0:
            raise ValueError('TTL must be a positive number of seconds')
        return value

    @field_validator('OAUTH2_SCOPE_DELIMITER')
    @classmethod
    def check_scope_delimiter(cls, value: str) -> str:
        if not value:
            raise ValueError('Scope delimiter must not be empty')
        return value

    def replace(self, **changes) -> 'OAuthSetting':
        """Return a validated copy with ``changes`` applied."""
        return self.model_validate({**self.model_dump(), **changes})
