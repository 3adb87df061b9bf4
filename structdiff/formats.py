"""
structdiff.formats — JSON text in and out.

    • from_json:  JSON text → Python value, errors tagged with the side
    • load_file:  path → JSON text, errors tagged with the path
    • to_json:    Python value → compact JSON, as shown in diff entries

Parsing is the standard library json module; duplicate keys keep the last
value and object key order is preserved.
"""

import json
from pathlib import Path
from typing import Any, Union

from .errors import InputError, ReadError


# ═══════════════════════════════════════════════════════════════════
#  JSON STRINGS ↔ PYTHON VALUES
# ═══════════════════════════════════════════════════════════════════

def from_json(text: str, side: str = "first") -> Any:
    """
    Parse a JSON document.

    Raises InputError naming `side` ("first" or "second") when the text
    is not valid JSON.
    """
    try:
        return json.loads(text)
    except json.JSONDecodeError as exc:
        raise InputError(side, exc.msg, exc.lineno, exc.colno) from exc


def to_json(value: Any, **kwargs) -> str:
    """
    Render a value as compact JSON.

        to_json({"c": {"d": "e"}})  →  '{"c":{"d":"e"}}'
        to_json("f")                →  '"f"'

    Non-JSON values (from hand-built inputs) render through str().
    """
    kwargs.setdefault("separators", (",", ":"))
    kwargs.setdefault("ensure_ascii", False)
    kwargs.setdefault("default", str)
    return json.dumps(value, **kwargs)


# ═══════════════════════════════════════════════════════════════════
#  FILES
# ═══════════════════════════════════════════════════════════════════

def load_file(path: Union[str, Path], encoding: str = "utf-8") -> str:
    """Read a whole document from disk, raising ReadError on failure."""
    try:
        return Path(path).read_text(encoding=encoding)
    except (OSError, UnicodeDecodeError) as exc:
        reason = exc.strerror if isinstance(exc, OSError) and exc.strerror else str(exc)
        raise ReadError(str(path), reason) from exc
