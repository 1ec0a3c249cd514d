"""
Lattice sites.

A Site is a labeled point in continuous 3D space. Sites are immutable:
every transform (move, relabel, retag) returns a new Site.
"""

import json
from dataclasses import dataclass, field, replace
from typing import Dict, Iterable, Optional, Tuple

from ..errors import SerializationError
from .util import Axis, Tagged, normalize_tags, vector_from_json


@dataclass(frozen=True)
class Site(Tagged):
    """
    A labeled point of the lattice.

    Attributes
    ----------
    kind : str
        Species label (e.g. 'Fe', 'A')
    position : Tuple[float, float, float]
        Cartesian position
    tags : Tuple[str, ...] or None
        Optional ordered tags. ``None`` means "no tags", which is kept
        distinct from an empty tuple.

    Examples
    --------
    >>> site = Site('Fe').move_x(1.5)
    >>> site.position
    (1.5, 0.0, 0.0)
    """
    kind: str
    position: Tuple[float, float, float] = (0.0, 0.0, 0.0)
    tags: Optional[Tuple[str, ...]] = field(default=None)

    def __post_init__(self):
        if not isinstance(self.kind, str):
            raise TypeError(f"Site kind must be a string, got {type(self.kind).__name__}")
        position = tuple(float(x) for x in self.position)
        if len(position) != 3:
            raise ValueError(f"Site position must have 3 components, got {len(position)}")
        object.__setattr__(self, 'position', position)
        object.__setattr__(self, 'tags', normalize_tags(self.tags))

    def move_along(self, axis: Axis, distance: float) -> 'Site':
        """Return a copy translated by ``distance`` along ``axis``."""
        current = axis.component(self.position)
        return replace(self, position=axis.replace(self.position, current + distance))

    def move_x(self, distance: float) -> 'Site':
        return self.move_along(Axis.X, distance)

    def move_y(self, distance: float) -> 'Site':
        return self.move_along(Axis.Y, distance)

    def move_z(self, distance: float) -> 'Site':
        return self.move_along(Axis.Z, distance)

    def with_kind(self, kind: str) -> 'Site':
        return replace(self, kind=kind)

    def with_position(self, position: Tuple[float, float, float]) -> 'Site':
        return replace(self, position=position)

    def with_tags(self, tags: Optional[Iterable[str]]) -> 'Site':
        return replace(self, tags=tags)

    def to_dict(self) -> Dict:
        """
        Serialize to a JSON-ready dictionary.

        The ``tags`` key is only written when tags are present.
        """
        data = {'kind': self.kind, 'position': list(self.position)}
        if self.tags is not None:
            data['tags'] = list(self.tags)
        return data

    @classmethod
    def from_dict(cls, data: Dict) -> 'Site':
        """Reconstruct from a dictionary produced by to_dict() (or read from JSON)."""
        try:
            return cls(
                kind=data['kind'],
                position=vector_from_json(data['position'], 'position'),
                tags=data.get('tags'),
            )
        except (KeyError, TypeError, ValueError, AttributeError) as err:
            raise SerializationError(f"Invalid site: {err}") from err

    @classmethod
    def from_json(cls, text: str) -> 'Site':
        try:
            data = json.loads(text)
        except json.JSONDecodeError as err:
            raise SerializationError(f"Invalid site JSON: {err}") from err
        return cls.from_dict(data)
