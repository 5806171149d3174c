from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from ..common.types import TokenGenerator
    from ..rfc6749.mixins import ClientMixin


class BearerTokenGenerator(object):
    """Bearer token generator which can create the strings of access
    tokens and refresh tokens.

    :param access_token_generator: a function to generate access_token.
    :param refresh_token_generator: a function to generate refresh_token,
        if not provided, refresh_token will not be added into token.
    """

    #: Token type of the issued tokens
    TOKEN_TYPE = 'Bearer'

    def __init__(
        self,
        access_token_generator: 'TokenGenerator',
        refresh_token_generator: Optional['TokenGenerator'] = None,
    ):
        self.access_token_generator = access_token_generator
        self.refresh_token_generator = refresh_token_generator

    @property
    def can_refresh(self) -> bool:
        return self.refresh_token_generator is not None

    def generate_access_token(
        self,
        grant_type: str,
        client: 'ClientMixin',
        scope: str = None,
        expires_in: int = None,
    ) -> str:
        return self.access_token_generator(grant_type, client, scope, expires_in)

    def generate_refresh_token(
        self,
        grant_type: str,
        client: 'ClientMixin',
        scope: str = None,
        expires_in: int = None,
    ) -> Optional[str]:
        if self.refresh_token_generator is None:
            return None
        return self.refresh_token_generator(grant_type, client, scope, expires_in)
