"""
    Implementation for OAuth 2 Error Response.
    https://tools.ietf.org/html/rfc6749#section-5.2

    Every failure raised while issuing a token is an :class:`OAuth2Error`
    tagged with an :class:`ErrorKind`. The kind selects the message template,
    the HTTP status code and the extra response headers from the read-only
    tables defined in this module.

    :copyright: (c) 2022 by Do Quoc Vuong.
"""
import enum
from types import MappingProxyType
from typing import TYPE_CHECKING, Dict, List, Mapping, Optional, Union

from starlette import status

from ..common.errors import HTTPError

if TYPE_CHECKING:
    from .wrappers import OAuth2Request

__all__ = [
    'ErrorKind', 'ERROR_MESSAGES', 'ERROR_STATUS_CODES', 'ERROR_SUB_CODES',
    'format_error_message', 'derive_http_headers',
    'OAuth2Error', 'ClientError', 'ServerError',
    'InvalidRequestError', 'UnauthorizedClientError', 'AccessDeniedError',
    'UnsupportedResponseTypeError', 'InvalidScopeError',
    'TemporarilyUnavailableError', 'UnsupportedGrantTypeError',
    'InvalidClientError', 'InvalidGrantError', 'InvalidCredentialsError',
    'InvalidRefreshError',
]


class ErrorKind(str, enum.Enum):
    INVALID_REQUEST = 'invalid_request'
    UNAUTHORIZED_CLIENT = 'unauthorized_client'
    ACCESS_DENIED = 'access_denied'
    UNSUPPORTED_RESPONSE_TYPE = 'unsupported_response_type'
    INVALID_SCOPE = 'invalid_scope'
    SERVER_ERROR = 'server_error'
    TEMPORARILY_UNAVAILABLE = 'temporarily_unavailable'
    UNSUPPORTED_GRANT_TYPE = 'unsupported_grant_type'
    INVALID_CLIENT = 'invalid_client'
    INVALID_GRANT = 'invalid_grant'
    INVALID_CREDENTIALS = 'invalid_credentials'
    INVALID_REFRESH = 'invalid_refresh'


ERROR_MESSAGES: Mapping[ErrorKind, str] = MappingProxyType({
    ErrorKind.INVALID_REQUEST: (
        'The request is missing a required parameter, includes an invalid parameter value, '
        'includes a parameter more than once, or is otherwise malformed. Check the "{}" parameter.'
    ),
    ErrorKind.UNAUTHORIZED_CLIENT: 'The client is not authorized to request an access token using this method.',
    ErrorKind.ACCESS_DENIED: 'The resource owner or authorization server denied the request.',
    ErrorKind.UNSUPPORTED_RESPONSE_TYPE: (
        'The authorization server does not support obtaining an access token using this method.'
    ),
    ErrorKind.INVALID_SCOPE: 'The requested scope is invalid, unknown, or malformed. Check the "{}" scope.',
    ErrorKind.SERVER_ERROR: (
        'The authorization server encountered an unexpected condition which prevented it '
        'from fulfilling the request.'
    ),
    ErrorKind.TEMPORARILY_UNAVAILABLE: (
        'The authorization server is currently unable to handle the request due to a '
        'temporary overloading or maintenance of the server.'
    ),
    ErrorKind.UNSUPPORTED_GRANT_TYPE: (
        'The authorization grant type "{}" is not supported by the authorization server'
    ),
    ErrorKind.INVALID_CLIENT: 'Client authentication failed',
    ErrorKind.INVALID_GRANT: (
        'The provided authorization grant is invalid, expired, revoked, does not match the '
        'redirection URI used in the authorization request, or was issued to another client. '
        'Check the "{}" parameter.'
    ),
    ErrorKind.INVALID_CREDENTIALS: 'The user credentials were incorrect.',
    ErrorKind.INVALID_REFRESH: 'The refresh token is invalid.',
})

# RFC 6749, section 4.1.2.1: there is no 503 for "temporarily_unavailable",
# a 503 status code cannot be returned to the client via an HTTP redirect.
ERROR_STATUS_CODES: Mapping[ErrorKind, int] = MappingProxyType({
    ErrorKind.INVALID_REQUEST: status.HTTP_400_BAD_REQUEST,
    ErrorKind.UNAUTHORIZED_CLIENT: status.HTTP_400_BAD_REQUEST,
    ErrorKind.ACCESS_DENIED: status.HTTP_401_UNAUTHORIZED,
    ErrorKind.UNSUPPORTED_RESPONSE_TYPE: status.HTTP_400_BAD_REQUEST,
    ErrorKind.INVALID_SCOPE: status.HTTP_400_BAD_REQUEST,
    ErrorKind.SERVER_ERROR: status.HTTP_500_INTERNAL_SERVER_ERROR,
    ErrorKind.TEMPORARILY_UNAVAILABLE: status.HTTP_400_BAD_REQUEST,
    ErrorKind.UNSUPPORTED_GRANT_TYPE: status.HTTP_501_NOT_IMPLEMENTED,
    ErrorKind.INVALID_CLIENT: status.HTTP_401_UNAUTHORIZED,
    ErrorKind.INVALID_GRANT: status.HTTP_400_BAD_REQUEST,
    ErrorKind.INVALID_CREDENTIALS: status.HTTP_400_BAD_REQUEST,
    ErrorKind.INVALID_REFRESH: status.HTTP_400_BAD_REQUEST,
})

#: internal sub-code of every kind, reported to logs only
ERROR_SUB_CODES: Mapping[ErrorKind, int] = MappingProxyType({
    kind: index for index, kind in enumerate(ErrorKind)
})

_STATUS_LINES: Mapping[int, str] = MappingProxyType({
    status.HTTP_401_UNAUTHORIZED: 'HTTP/1.1 401 Unauthorized',
    status.HTTP_500_INTERNAL_SERVER_ERROR: 'HTTP/1.1 500 Internal Server Error',
    status.HTTP_501_NOT_IMPLEMENTED: 'HTTP/1.1 501 Not Implemented',
})
_DEFAULT_STATUS_LINE = 'HTTP/1.1 400 Bad Request'


def _as_kind(kind: Union[ErrorKind, str]) -> Optional[ErrorKind]:
    try:
        return ErrorKind(kind)
    except ValueError:
        return None


def format_error_message(kind: Union[ErrorKind, str], detail: Optional[str] = None) -> str:
    """Render the message template of ``kind``, filling its slot (if any)
    with ``detail``.
    """
    template = ERROR_MESSAGES[ErrorKind(kind)]
    return template.format('' if detail is None else detail)


def _get_auth_scheme(request: Optional['OAuth2Request']) -> Optional[str]:
    if request is None:
        return None

    if request.auth_user is not None:
        return 'Basic'

    auth_header = request.headers.get('authorization')
    if auth_header is not None:
        if auth_header.startswith('Bearer'):
            return 'Bearer'
        if auth_header.startswith('Basic'):
            return 'Basic'
    return None


def derive_http_headers(kind: Union[ErrorKind, str], request: Optional['OAuth2Request'] = None) -> List[str]:
    """Get all header lines that have to be sent with the error response.

    The first line is always the HTTP status line. For ``invalid_client`` a
    ``WWW-Authenticate`` challenge is added when the client attempted to
    authenticate, matching the scheme it used (RFC 6749, section 5.2).

    :param kind: error kind or its string key
    :param request: the request that failed, used to find the auth scheme
    :return: list of header lines
    """
    kind = _as_kind(kind)
    status_code = ERROR_STATUS_CODES.get(kind) if kind is not None else None
    headers = [_STATUS_LINES.get(status_code, _DEFAULT_STATUS_LINE)]

    if kind is ErrorKind.INVALID_CLIENT:
        auth_scheme = _get_auth_scheme(request)
        if auth_scheme is not None:
            headers.append('WWW-Authenticate: {} realm=""'.format(auth_scheme))

    return headers


class OAuth2Error(HTTPError):
    """An error of a token request. ``kind`` drives the body, the status code
    and the headers; ``detail`` is the value interpolated into the message and
    ``sub_code`` a finer grained code for telemetry.
    """
    kind: ErrorKind = ErrorKind.SERVER_ERROR

    def __init__(self, detail: Optional[str] = None, kind: Union[ErrorKind, str] = None, sub_code: int = None):
        if kind is not None:
            self.kind = ErrorKind(kind)
        self.detail = detail
        self.sub_code = ERROR_SUB_CODES[self.kind] if sub_code is None else sub_code
        super().__init__(
            error=self.kind.value,
            description=format_error_message(self.kind, detail),
            status_code=ERROR_STATUS_CODES[self.kind],
        )

    def get_headers(self, request: Optional['OAuth2Request'] = None) -> Dict[str, str]:
        headers = super().get_headers(request)
        # skip the status line
        for line in derive_http_headers(self.kind, request)[1:]:
            name, value = line.split(': ', 1)
            headers[name] = value
        return headers

    def __repr__(self):
        return '<{} "{}" detail={!r}>'.format(self.__class__.__name__, self.error, self.detail)


class ClientError(OAuth2Error):
    """A fault attributable to the caller. The interpolated detail is safe to
    report verbatim.
    """

    def __init__(self, detail: Optional[str] = None, kind: Union[ErrorKind, str] = None, sub_code: int = None):
        if ErrorKind(kind if kind is not None else self.kind) is ErrorKind.SERVER_ERROR:
            raise ValueError('server_error is not a client error, raise ServerError instead')
        super().__init__(detail=detail, kind=kind, sub_code=sub_code)


class ServerError(OAuth2Error):
    """A configuration or collaborator defect. ``detail`` is kept for the
    logs and never sent to the caller.
    """
    kind = ErrorKind.SERVER_ERROR

    def __init__(self, detail: Optional[str] = None, sub_code: int = None):
        super().__init__(detail=detail, sub_code=sub_code)

    def __str__(self):
        return '{}: {}'.format(self.error, self.detail or self.description)


class InvalidRequestError(ClientError):
    """The request is missing a required parameter, includes an
    unsupported parameter value (other than grant type),
    repeats a parameter, includes multiple credentials,
    utilizes more than one mechanism for authenticating the
    client, or is otherwise malformed.

    https://tools.ietf.org/html/rfc6749#section-5.2
    """
    kind = ErrorKind.INVALID_REQUEST


class UnauthorizedClientError(ClientError):
    """ The authenticated client is not authorized to use this
    authorization grant type.

    https://tools.ietf.org/html/rfc6749#section-5.2
    """
    kind = ErrorKind.UNAUTHORIZED_CLIENT


class AccessDeniedError(ClientError):
    """The resource owner or authorization server denied the request.

    Used in authorization endpoint for "code" and "implicit". Defined in
    `Section 4.1.2.1`_.

    .. _`Section 4.1.2.1`: https://tools.ietf.org/html/rfc6749#section-4.1.2.1
    """
    kind = ErrorKind.ACCESS_DENIED


class UnsupportedResponseTypeError(ClientError):
    """The authorization server does not support obtaining
    an access token using this method."""
    kind = ErrorKind.UNSUPPORTED_RESPONSE_TYPE


class InvalidScopeError(ClientError):
    """The requested scope is invalid, unknown, malformed, or
    exceeds the scope granted by the resource owner.

    https://tools.ietf.org/html/rfc6749#section-5.2
    """
    kind = ErrorKind.INVALID_SCOPE


class TemporarilyUnavailableError(ClientError):
    kind = ErrorKind.TEMPORARILY_UNAVAILABLE


class UnsupportedGrantTypeError(ClientError):
    """The authorization grant type is not supported by the
    authorization server. Raised by grant type lookups.

    https://tools.ietf.org/html/rfc6749#section-5.2
    """
    kind = ErrorKind.UNSUPPORTED_GRANT_TYPE


class InvalidClientError(ClientError):
    """Client authentication failed (e.g., unknown client, no
    client authentication included, or unsupported
    authentication method).  If the client attempted to authenticate
    via the "Authorization" request header field, the response includes
    the "WWW-Authenticate" header field matching the authentication
    scheme used by the client.

    https://tools.ietf.org/html/rfc6749#section-5.2
    """
    kind = ErrorKind.INVALID_CLIENT


class InvalidGrantError(ClientError):
    """The provided authorization grant (e.g., authorization
    code, resource owner credentials) or refresh token is
    invalid, expired, revoked, does not match the redirection
    URI used in the authorization request, or was issued to
    another client.

    https://tools.ietf.org/html/rfc6749#section-5.2
    """
    kind = ErrorKind.INVALID_GRANT


class InvalidCredentialsError(ClientError):
    kind = ErrorKind.INVALID_CREDENTIALS


class InvalidRefreshError(ClientError):
    kind = ErrorKind.INVALID_REFRESH
