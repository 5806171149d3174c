import random
import string

UNICODE_ASCII_CHARACTER_SET = string.ascii_letters + string.digits

_rand = random.SystemRandom()


def generate_token(length: int = 30, chars: str = UNICODE_ASCII_CHARACTER_SET) -> str:
    """Generate an opaque random string suitable for access tokens, refresh
    tokens and authorization codes.
    """
    return ''.join(_rand.choice(chars) for _ in range(length))
