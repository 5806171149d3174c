from typing import TYPE_CHECKING, Optional, Protocol, TypedDict

if TYPE_CHECKING:
    from ..rfc6749.grants import BaseGrant
    from ..rfc6749.mixins import ClientMixin


class TokenGenerator(Protocol):
    def __call__(
        self,
        grant_type: str,
        client: 'ClientMixin',
        scope: Optional[str] = None,
        expires_in: Optional[int] = None,
    ) -> str:
        ...


class GrantHook(Protocol):
    def __call__(self, grant: 'BaseGrant', *args, **kwargs) -> None:
        ...


class _TokenPayloadBase(TypedDict):
    access_token: str
    token_type: str
    expires_in: int
    scope: str


class TokenPayloadDict(_TokenPayloadBase, total=False):
    refresh_token: str


OAuth2RequestDataPayloadDict = TypedDict(
    'OAuth2RequestDataPayloadDict',
    {
        'client_id': str,
        'client_secret': str,
        'response_type': str,
        'grant_type': str,
        'redirect_uri': str,
        'state': str,
        'scope': str,
        'code': str,
        'refresh_token': str,
        'username': str,
        'password': str,
    },
    total=False,
)
