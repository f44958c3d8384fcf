from __future__ import annotations

import json
import logging
from typing import Any

from .errors import JsonParseError

logger = logging.getLogger(__name__)


def serialize(node: Any) -> str:
    """Render a JSON node (dict/list/str/number/bool/None) as compact JSON text."""
    return json.dumps(node, separators=(",", ":"), ensure_ascii=False, allow_nan=False)


def _reject_constant(token: str):
    raise JsonParseError(f"Invalid JSON constant {token}")


def deserialize(text: str | bytes) -> Any:
    """Parse JSON text into a node, raising JsonParseError on malformed input.

    The non-standard NaN/Infinity tokens are rejected, matching serialize.
    """
    try:
        return json.loads(text, parse_constant=_reject_constant)
    except json.JSONDecodeError as exc:
        logger.debug("Rejected JSON document: %s", exc)
        raise JsonParseError(exc.msg, line=exc.lineno, column=exc.colno, position=exc.pos) from exc
    except RecursionError as exc:
        raise JsonParseError("Document nested too deeply") from exc
    except (TypeError, UnicodeDecodeError) as exc:
        raise JsonParseError(str(exc)) from exc
