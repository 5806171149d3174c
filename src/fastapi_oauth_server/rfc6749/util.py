import base64
import binascii
from typing import Iterable, List, Mapping, Optional, Tuple, Union
from urllib.parse import unquote

from ..common.encoding import to_unicode
from ..utils.consts import DEFAULT_SCOPE_DELIMITER


def list_to_scope(scope: Union[Iterable[str], str, None], delimiter: str = DEFAULT_SCOPE_DELIMITER) -> Optional[str]:
    """Convert a list of scopes to a delimiter-joined scope string."""
    if isinstance(scope, (set, tuple, list)):
        return delimiter.join([to_unicode(s) for s in scope])
    if scope is None:
        return scope
    return to_unicode(scope)


def scope_to_list(scope: Union[Iterable[str], str, None], delimiter: str = DEFAULT_SCOPE_DELIMITER) -> Optional[List[str]]:
    """Convert a delimiter-joined scope string to a list of scope names.
    Names are trimmed and empty names are dropped.
    """
    if isinstance(scope, (tuple, list, set)):
        return [to_unicode(s) for s in scope]
    elif scope is None:
        return None
    return [s.strip() for s in scope.split(delimiter) if s.strip()]


def extract_basic_authorization(headers: Mapping[str, str]) -> Tuple[Optional[str], Optional[str]]:
    auth = headers.get('authorization')
    if not auth or ' ' not in auth:
        return None, None

    auth_type, auth_token = auth.split(None, 1)
    if auth_type.lower() != 'basic':
        return None, None

    try:
        query = to_unicode(base64.b64decode(auth_token, validate=True))
    except (binascii.Error, ValueError, TypeError):
        return None, None

    if ':' in query:
        username, password = query.split(':', 1)
        return unquote(username), unquote(password)
    return query, None
