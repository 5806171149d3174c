#: coding: utf-8
from typing import Dict, List, Tuple

from starlette import status

from ..utils.consts import DEFAULT_JSON_HEADERS


class BaseError(Exception):
    """Base Exception for all errors in library."""

    #: short-string error code
    error = None
    #: long-string to describe this error
    description = ''

    def __init__(self, error: str = None, description: str = None):
        if error is not None:
            self.error = error

        if description is not None:
            self.description = description

        message = '{}: {}'.format(self.error, self.description)
        super().__init__(message)

    def __repr__(self):
        return '<{} "{}">'.format(self.__class__.__name__, self.error)


class HTTPError(BaseError):
    status_code: int = status.HTTP_400_BAD_REQUEST

    def __init__(self, error: str = None, description: str = None, status_code: int = None):
        super().__init__(error, description)
        if status_code is not None:
            self.status_code = status_code

    def get_error_description(self) -> str:
        return self.description

    def get_body(self) -> List[Tuple[str, str]]:
        error = [('error', self.error)]

        description = self.get_error_description()
        if description:
            error.append(('error_description', description))
        return error

    def get_headers(self, request=None) -> Dict[str, str]:
        return dict(DEFAULT_JSON_HEADERS)

    def __call__(self, request=None) -> Tuple[int, Dict, Dict]:
        body = dict(self.get_body())
        headers = self.get_headers(request)
        return self.status_code, body, headers
