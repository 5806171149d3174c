import time
from typing import TYPE_CHECKING, Any, Dict, Mapping, Optional, Union

from starlette.datastructures import Headers
from starlette.requests import Request

from .mixins import AuthorizationCodeMixin, ClientMixin, RefreshTokenMixin, SessionMixin
from .util import extract_basic_authorization

if TYPE_CHECKING:
    from ..common.types import OAuth2RequestDataPayloadDict, TokenPayloadDict

FORM_CONTENT_TYPES = ('application/x-www-form-urlencoded', 'multipart/form-data')


class OAuth2Token(dict):
    """The token payload returned by a grant type::

        {
            "access_token": "...",
            "token_type": "Bearer",
            "expires_in": 3600,
            "scope": "basic",
            "refresh_token": "..."
        }
    """

    def __init__(self, params: Union['TokenPayloadDict', Dict], issued_at: int = None):
        super().__init__(params)
        self.issued_at = int(time.time()) if issued_at is None else int(issued_at)

    @property
    def expires_at(self) -> Optional[int]:
        expires_in = self.get('expires_in')
        if not expires_in:
            return None
        return self.issued_at + int(expires_in)

    def is_expired(self) -> Optional[bool]:
        expires_at = self.expires_at
        if not expires_at:
            return None
        return expires_at < time.time()

    @classmethod
    def from_dict(cls, token: Union[Dict, 'OAuth2Token']) -> 'OAuth2Token':
        if isinstance(token, dict) and not isinstance(token, cls):
            token = cls(token)
        return token


class OAuth2Request(object):
    """Explicit representation of an incoming OAuth 2 request. Every entry
    point of the authorization server receives one; nothing is read from
    ambient state.

    :param method: HTTP method
    :param uri: requested URI
    :param form: form encoded body parameters
    :param query: query string parameters
    :param headers: request headers, matched case-insensitively
    :param auth_user: user of HTTP Basic credentials, parsed from the
        ``Authorization`` header when not given
    """

    def __init__(
        self,
        method: str = 'POST',
        uri: str = '',
        form: Mapping[str, Any] = None,
        query: Mapping[str, Any] = None,
        headers: Mapping[str, str] = None,
        auth_user: str = None,
    ):
        self.method = method.upper()
        self.uri = uri
        self.form: Dict[str, Optional[Any]] = dict(form or {})
        self.query: Dict[str, Optional[Any]] = dict(query or {})
        self.headers = Headers(headers=dict(headers or {}))

        basic_user, basic_password = extract_basic_authorization(self.headers)
        self.auth_user: Optional[str] = basic_user if auth_user is None else auth_user
        self.auth_password: Optional[str] = basic_password

        self.data: OAuth2RequestDataPayloadDict = {**self.query, **self.form}

        #: client which sending this request
        self.client: Optional[ClientMixin] = None
        #: session bound to the issued token
        self.session: Optional[SessionMixin] = None
        #: authorization_code or refresh token being redeemed
        self.credential: Union[Optional[AuthorizationCodeMixin], Optional[RefreshTokenMixin]] = None

    @classmethod
    async def from_starlette(cls, request: Request) -> 'OAuth2Request':
        form = {}
        content_type = request.headers.get('content-type', '')
        if content_type.startswith(FORM_CONTENT_TYPES):
            form_data = await request.form()
            form = {key: value for key, value in form_data.items()}

        return cls(
            method=request.method,
            uri=str(request.url),
            form=form,
            query=dict(request.query_params),
            headers=dict(request.headers),
        )

    @property
    def grant_type(self) -> Optional[str]:
        # grant_type is only accepted from the form encoded body
        return self.form.get('grant_type', None)

    @property
    def client_id(self) -> Optional[str]:
        """The authorization server issues the registered client a client
        identifier -- a unique string representing the registration
        information provided by the client. The value is extracted from
        request.

        :return: string
        """
        return self.data.get('client_id', None)

    @property
    def response_type(self) -> Optional[str]:
        return self.data.get('response_type', None)

    @property
    def redirect_uri(self) -> Optional[str]:
        return self.data.get('redirect_uri', None)

    @property
    def scope(self) -> Optional[str]:
        return self.data.get('scope', None)

    @property
    def state(self) -> Optional[str]:
        return self.data.get('state', None)

    def __repr__(self):
        return '<{} {} {}>'.format(self.__class__.__name__, self.method, self.uri)
