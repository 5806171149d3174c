from typing import Callable, Optional, Type, Union

from starlette.requests import Request
from werkzeug.utils import import_string

from ..common.security import generate_token
from ..common.types import TokenGenerator
from ..rfc6749.errors import ServerError
from ..rfc6749.mixins import ClientMixin
from ..rfc6749.wrappers import OAuth2Request


async def create_oauth_request(
    request: Union[Request, OAuth2Request],
    request_cls: Type[OAuth2Request] = OAuth2Request,
) -> OAuth2Request:
    if isinstance(request, request_cls):
        return request

    return await request_cls.from_starlette(request)


def create_token_generator(
    token_generator_conf: Union[Callable, bool, str],
    length: int,
    allow_none=False,
) -> Optional[TokenGenerator]:
    if callable(token_generator_conf):
        return token_generator_conf

    if isinstance(token_generator_conf, str):
        return import_string(token_generator_conf)
    elif token_generator_conf is True:
        def token_generator(
            grant_type: str,
            client: ClientMixin,
            scope: str = None,
            expires_in: int = None,
        ) -> str:
            return generate_token(length=length)

        return token_generator

    if allow_none:
        return None

    raise ServerError("Can't create token generator!")
