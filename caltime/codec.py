"""JSON helpers for caltime values.

Each value type exposes ``to_json()``; TimeJSONEncoder lets ``json.dumps``
serialise them anywhere inside a document.

Example:
    >>> dumps({"at": DateTime.of(2023, 6, 19, 7, 56, 34), "every": Duration(HOUR)})
    '{"at": "2023-06-19T07:56:34Z", "every": "1h0m0s"}'
"""

import json
from typing import Any

from typing_extensions import override

from caltime.instant import Instant


class TimeJSONEncoder(json.JSONEncoder):
    @override
    def default(self, o: Any) -> Any:
        to_json = getattr(o, "to_json", None)
        if callable(to_json):
            return to_json()
        if isinstance(o, Instant):
            return None if o.is_zero() else str(o)
        return super().default(o)


def dumps(obj: Any, **kwargs: Any) -> str:
    """json.dumps with TimeJSONEncoder."""
    return json.dumps(obj, cls=TimeJSONEncoder, **kwargs)
