"""
Reading and writing lattices as JSON.

Wire format
-----------
    {
      "size": [x, y, z],
      "sites": [{"kind": str, "position": [x, y, z], "tags": [str]?}, ...],
      "edges": [{"source": int, "target": int, "delta": [dx, dy, dz], "tags": [str]?}, ...]
    }

Two text forms are produced:
- compact: no whitespace at all
- pretty: nested collections are indented only up to ``max_indent`` levels;
  deeper collections are written inline, so each site and edge takes a
  single line
"""

import json
import logging
import sys
from pathlib import Path
from typing import Any, Optional, TextIO, Union

from ..core.lattice import Lattice
from ..errors import LatticeIOError, SerializationError

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]

DEFAULT_MAX_INDENT = 2
INDENT = '  '


def to_string(lattice: Lattice) -> str:
    """Compact JSON text of ``lattice``."""
    return json.dumps(lattice.to_dict(), separators=(',', ':'))


def to_string_pretty(value: Any, max_indent: int = DEFAULT_MAX_INDENT) -> str:
    """
    Pretty JSON text with a bounded indentation depth.

    Parameters
    ----------
    value : Lattice or JSON-compatible object
        What to encode. Lattices are converted with ``to_dict()``.
    max_indent : int, optional
        Deepest nesting level that still gets one item per line (default 2).
        Collections nested deeper are written inline as ``[a, b, c]``.

    Examples
    --------
    >>> print(to_string_pretty({'a': [[1, 2], [3]]}, max_indent=2))
    {
      "a": [
        [1, 2],
        [3]
      ]
    }
    """
    if isinstance(value, Lattice):
        value = value.to_dict()
    return _encode(value, 0, max_indent)


def _encode(value: Any, depth: int, max_indent: int) -> str:
    if isinstance(value, dict):
        items = [f"{json.dumps(str(key))}: {_encode(item, depth + 1, max_indent)}"
                 for key, item in value.items()]
        return _wrap(items, '{', '}', depth, max_indent)
    if isinstance(value, (list, tuple)):
        items = [_encode(item, depth + 1, max_indent) for item in value]
        return _wrap(items, '[', ']', depth, max_indent)
    return json.dumps(value)


def _wrap(items, opening: str, closing: str, depth: int, max_indent: int) -> str:
    if not items:
        return opening + closing
    # Items of this collection sit one level deeper
    if depth + 1 > max_indent:
        return opening + ', '.join(items) + closing
    inner = INDENT * (depth + 1)
    body = ',\n'.join(inner + item for item in items)
    return f"{opening}\n{body}\n{INDENT * depth}{closing}"


def from_string(text: str) -> Lattice:
    """Parse and validate a lattice from JSON text."""
    return Lattice.from_json(text)


def read_lattice(source: Optional[Union[PathLike, TextIO]] = None) -> Lattice:
    """
    Read and validate a lattice.

    Parameters
    ----------
    source : str, Path, file object or None
        File path, an open text stream, or None for standard input

    Raises
    ------
    LatticeIOError
        If the file cannot be read
    SerializationError
        If the content is not a valid lattice document
    """
    try:
        if source is None:
            origin = '<stdin>'
            text = sys.stdin.read()
        elif hasattr(source, 'read'):
            origin = getattr(source, 'name', '<stream>')
            text = source.read()
        else:
            path = Path(source)
            origin = str(path)
            try:
                text = path.read_text(encoding='utf-8')
            except OSError as err:
                raise LatticeIOError(f"Could not read lattice file '{path}'") from err
    except UnicodeDecodeError as err:
        raise SerializationError(f"Lattice input {origin} is not valid UTF-8 text") from err

    lattice = from_string(text)
    logger.info(f"Read {lattice} from {origin}")
    return lattice


def write_lattice(lattice: Lattice,
                  target: Optional[Union[PathLike, TextIO]] = None,
                  pretty: bool = False) -> None:
    """
    Write a lattice as JSON followed by a newline.

    Parameters
    ----------
    lattice : Lattice
    target : str, Path, file object or None
        File path, an open text stream, or None for standard output
    pretty : bool
        Use the pretty form instead of the compact one
    """
    text = to_string_pretty(lattice) if pretty else to_string(lattice)

    if target is None:
        sys.stdout.write(text + '\n')
    elif hasattr(target, 'write'):
        target.write(text + '\n')
    else:
        path = Path(target)
        try:
            path.write_text(text + '\n', encoding='utf-8')
        except OSError as err:
            raise LatticeIOError(f"Could not write lattice file '{path}'") from err
        logger.info(f"Wrote {lattice} to {path}")
