"""
Small shared helpers for the core value types.

- Axis: the three cartesian directions, used to pick a tuple component
- floor_divmod: wrap an integer into [0, modulus) and report the carry
- Tagged: mixin giving tag queries to anything with an optional ``tags`` tuple
- vector_from_json: shape check for 3-component arrays read from documents
"""

from enum import Enum
from typing import Dict, Optional, Sequence, Tuple


class Axis(Enum):
    """
    Cartesian axis of a 3D lattice.

    The value of each member is the index of the matching component in a
    ``(x, y, z)`` tuple, so ``vector[axis.value]`` reads the component along
    ``axis``.
    """

    X = 0
    Y = 1
    Z = 2

    @property
    def label(self) -> str:
        """Lower-case name ('x', 'y' or 'z')."""
        return self.name.lower()

    def component(self, vector: Sequence):
        """Return the component of ``vector`` along this axis."""
        return vector[self.value]

    def replace(self, vector: Sequence, value) -> tuple:
        """Return ``vector`` as a tuple with the component along this axis set to ``value``."""
        items = list(vector)
        items[self.value] = value
        return tuple(items)

    def others(self) -> Tuple['Axis', 'Axis']:
        """
        The two axes spanning the plane perpendicular to this one.

        Returned in cartesian order: X -> (Y, Z), Y -> (X, Z), Z -> (X, Y).
        """
        return tuple(axis for axis in Axis if axis is not self)

    @classmethod
    def parse(cls, name) -> 'Axis':
        """
        Coerce ``name`` into an Axis.

        Accepts Axis members, 'x'/'y'/'z' (any case) and the integers 0, 1, 2.
        """
        if isinstance(name, cls):
            return name
        if isinstance(name, int):
            return cls(name)
        try:
            return cls[str(name).strip().upper()]
        except KeyError:
            raise ValueError(f"Unknown axis '{name}'. Expected one of: x, y, z") from None

    @classmethod
    def labels(cls, prefix: Optional[str] = None) -> Dict[str, 'Axis']:
        """
        Map axis labels to members, optionally prefixed.

        >>> Axis.labels('along-')
        {'along-x': <Axis.X: 0>, 'along-y': <Axis.Y: 1>, 'along-z': <Axis.Z: 2>}
        """
        prefix = prefix or ''
        return {f"{prefix}{axis.label}": axis for axis in cls}


def floor_divmod(num: int, modulus: int) -> Tuple[int, int]:
    """
    Wrap ``num`` into ``[0, modulus)`` using floor semantics.

    Parameters
    ----------
    num : int
        Value to wrap, may be negative
    modulus : int
        Positive period

    Returns
    -------
    wrapped, carry : Tuple[int, int]
        ``wrapped = num mod modulus`` (never negative) and
        ``carry = floor(num / modulus)``, so that
        ``num == carry * modulus + wrapped``.

    Examples
    --------
    >>> floor_divmod(3, 2)
    (1, 1)
    >>> floor_divmod(-1, 2)
    (1, -1)
    """
    if modulus <= 0:
        raise ValueError(f"modulus must be positive, got {modulus}")
    carry, wrapped = divmod(int(num), int(modulus))
    return wrapped, carry


class Tagged:
    """Tag queries for value types carrying ``tags: Optional[Tuple[str, ...]]``."""

    tags: Optional[Tuple[str, ...]]

    def has_tag(self, tag: str) -> bool:
        """True if ``tag`` is among this object's tags (False when tags are absent)."""
        if self.tags is None:
            return False
        return tag in self.tags


def normalize_tags(tags) -> Optional[Tuple[str, ...]]:
    """
    Normalize a tag collection to an ordered tuple of strings.

    ``None`` stays ``None`` (no tags), anything iterable becomes a tuple
    preserving order and dropping repeated entries.
    """
    if tags is None:
        return None
    if isinstance(tags, str):
        raise TypeError("tags must be an iterable of strings, not a single string")
    ordered = []
    for tag in tags:
        if not isinstance(tag, str):
            raise TypeError(f"tags must be strings, got {type(tag).__name__}")
        if tag not in ordered:
            ordered.append(tag)
    return tuple(ordered)


def vector_from_json(raw, name: str) -> Tuple:
    """
    Check a decoded JSON value is an array of exactly 3 numbers.

    Raises
    ------
    ValueError
        If ``raw`` is not a list of 3 ints or floats (booleans rejected)
    """
    if not isinstance(raw, (list, tuple)):
        raise ValueError(f"{name} must be an array of 3 numbers, got {raw!r}")
    if len(raw) != 3 or any(isinstance(x, bool) or not isinstance(x, (int, float)) for x in raw):
        raise ValueError(f"{name} must be an array of 3 numbers, got {raw!r}")
    return tuple(raw)
