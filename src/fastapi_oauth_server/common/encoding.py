import json
from typing import Any, Optional, Union


def to_unicode(x, charset='utf-8', errors='strict') -> Optional[str]:
    if x is None or isinstance(x, str):
        return x
    if isinstance(x, bytes):
        return x.decode(charset, errors)
    return str(x)


def json_loads(s: Union[str, bytes, None], default: Any = None) -> Any:
    """Decode a JSON text column. An empty column decodes to ``default``."""
    if not s:
        return default
    return json.loads(to_unicode(s))


def json_dumps(data: Any, ensure_ascii=False) -> str:
    return json.dumps(data, ensure_ascii=ensure_ascii, separators=(',', ':'))
