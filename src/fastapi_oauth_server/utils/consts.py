from typing import Dict

name = 'FastAPI-OAuth-Server'
version = '0.1.0'

DEFAULT_JSON_HEADERS: Dict[str, str] = {
    'Content-Type': 'application/json',
    'Cache-Control': 'no-store',
    'Pragma': 'no-cache',
}

ACCESS_TOKEN_LENGTH = 42
REFRESH_TOKEN_LENGTH = 48
AUTH_CODE_LENGTH = 40

DEFAULT_SCOPE_DELIMITER = ' '
DEFAULT_ACCESS_TOKEN_TTL = 3600
DEFAULT_REFRESH_TOKEN_TTL = 604800
DEFAULT_AUTH_CODE_TTL = 600
