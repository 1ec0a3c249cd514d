"""
Directed periodic edges between lattice sites.

An Edge connects ``source`` to ``target`` (indices into the owning lattice's
site sequence) and records ``delta``, the integer lattice translation crossed
going from source to target. ``delta == (0, 0, 0)`` means both sites live in
the same periodic image.

Edges do not know how many sites their lattice has; index consistency is
checked by the Lattice.
"""

import json
from dataclasses import dataclass, field, replace
from typing import Dict, Iterable, Optional, Sequence, Tuple

from ..errors import SerializationError
from .util import Axis, Tagged, floor_divmod, normalize_tags, vector_from_json


@dataclass(frozen=True)
class Edge(Tagged):
    """
    A directed connection between two sites.

    Attributes
    ----------
    source : int
        Index of the source site
    target : int
        Index of the target site
    delta : Tuple[int, int, int]
        Lattice translation (in unit-cell repeats) from source to target
    tags : Tuple[str, ...] or None
        Optional ordered tags

    Examples
    --------
    >>> edge = Edge(0, 1, (0, 0, 1))
    >>> edge.move_z(1, 2, 3)
    Edge(source=2, target=5, delta=(0, 0, 0), tags=None)

    For a simple cubic cell every edge is a self loop on site 0 with deltas
    (1, 0, 0), (0, 1, 0) and (0, 0, 1); those three edges connect the whole
    infinite lattice.
    """
    source: int
    target: int
    delta: Tuple[int, int, int] = (0, 0, 0)
    tags: Optional[Tuple[str, ...]] = field(default=None)

    def __post_init__(self):
        for name in ('source', 'target'):
            value = getattr(self, name)
            if isinstance(value, bool) or int(value) != value or value < 0:
                raise ValueError(f"Edge {name} must be a non-negative integer, got {value!r}")
            object.__setattr__(self, name, int(value))
        delta = tuple(self.delta)
        if len(delta) != 3:
            raise ValueError(f"Edge delta must have 3 components, got {len(delta)}")
        if any(isinstance(d, bool) or int(d) != d for d in delta):
            raise ValueError(f"Edge delta must be integers, got {delta!r}")
        object.__setattr__(self, 'delta', tuple(int(d) for d in delta))
        object.__setattr__(self, 'tags', normalize_tags(self.tags))

    def delta_along(self, axis: Axis) -> int:
        return axis.component(self.delta)

    def is_periodic_along(self, axis: Axis) -> bool:
        """True if the edge crosses a cell boundary along ``axis``."""
        return self.delta_along(axis) != 0

    def move_along(self, axis: Axis, index: int, nsites: int, limit: int) -> 'Edge':
        """
        Place this unit-cell edge into replica ``index`` of an expansion.

        Parameters
        ----------
        axis : Axis
            Expansion axis
        index : int
            Replica the edge's source lands in, ``0 <= index < limit``
        nsites : int
            Number of sites in the lattice being expanded
        limit : int
            Total number of replicas along ``axis``

        Returns
        -------
        edge : Edge
            Edge with source in replica ``index``, target in the replica
            ``(index + d) mod limit`` and delta along ``axis`` replaced by
            ``floor((index + d) / limit)``, where ``d`` is the original delta
            along ``axis``. The other delta components are unchanged.

        Notes
        -----
        The new delta counts how many translations of the *expanded* box are
        still needed to reach the true neighbor. Wrapping uses floor
        semantics so negative deltas carry -1 instead of 0.
        """
        if not 0 <= index < limit:
            raise ValueError(f"replica index {index} outside [0, {limit})")
        replica, carry = floor_divmod(index + self.delta_along(axis), limit)
        return replace(
            self,
            source=self.source + index * nsites,
            target=replica * nsites + self.target,
            delta=axis.replace(self.delta, carry),
        )

    def move_x(self, index: int, nsites: int, limit: int) -> 'Edge':
        return self.move_along(Axis.X, index, nsites, limit)

    def move_y(self, index: int, nsites: int, limit: int) -> 'Edge':
        return self.move_along(Axis.Y, index, nsites, limit)

    def move_z(self, index: int, nsites: int, limit: int) -> 'Edge':
        return self.move_along(Axis.Z, index, nsites, limit)

    def reindex(self, index: Sequence[int]) -> 'Edge':
        """Rewrite both endpoints through the ``old -> new`` table ``index``."""
        return replace(self, source=index[self.source], target=index[self.target])

    def with_tags(self, tags: Optional[Iterable[str]]) -> 'Edge':
        return replace(self, tags=tags)

    def to_dict(self) -> Dict:
        data = {
            'source': self.source,
            'target': self.target,
            'delta': list(self.delta),
        }
        if self.tags is not None:
            data['tags'] = list(self.tags)
        return data

    @classmethod
    def from_dict(cls, data: Dict) -> 'Edge':
        try:
            return cls(
                source=data['source'],
                target=data['target'],
                delta=vector_from_json(data['delta'], 'delta'),
                tags=data.get('tags'),
            )
        except (KeyError, TypeError, ValueError, AttributeError) as err:
            raise SerializationError(f"Invalid edge: {err}") from err

    @classmethod
    def from_json(cls, text: str) -> 'Edge':
        try:
            data = json.loads(text)
        except json.JSONDecodeError as err:
            raise SerializationError(f"Invalid edge JSON: {err}") from err
        return cls.from_dict(data)


# Older documents and tools call edges "vertices"
Vertex = Edge
