"""
The Lattice container and its structural transforms.

A Lattice is a periodic unit cell: an ordered sequence of Sites, an ordered
sequence of Edges between them, and an orthorhombic box ``size``. Lattices
are immutable; every transform returns a new, validated Lattice.

Transforms
----------
expand_along / expand / expand_all : replicate the cell along axes
drop_along / drop_all              : remove periodic edges along axes
apply_mask                         : probabilistically remove sites under a mask
alloy_sites                        : probabilistically relabel sites

Only rectangular (orthorhombic, tetragonal, cubic) cells are supported: the
lattice vectors are assumed aligned with the cartesian axes.
"""

import json
import logging
import math
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

import numpy as np

from ...errors import InconsistentEdgesError, NegativeSizeError, SerializationError
from ..alloy import Alloy
from ..edge import Edge
from ..mask import Mask
from ..site import Site
from ..util import Axis, vector_from_json

logger = logging.getLogger(__name__)


class Lattice:
    """
    Periodic unit cell made of sites and edges.

    Parameters
    ----------
    size : Tuple[float, float, float]
        Extent of the cell along x, y and z. Must be non-negative.
    sites : Iterable[Site], optional
        Ordered sites. Edge endpoints index into this sequence.
    edges : Iterable[Edge], optional
        Ordered edges.

    Raises
    ------
    InconsistentEdgesError
        If an edge's source or target is not a valid site index
    NegativeSizeError
        If a size component is negative

    Examples
    --------
    >>> lattice = Lattice((1.0, 1.0, 1.0), [Site('Fe')], [Edge(0, 0, (1, 0, 0))])
    >>> big = lattice.expand_x(2)
    >>> [(e.source, e.target, e.delta) for e in big.edges]
    [(0, 1, (0, 0, 0)), (1, 0, (1, 0, 0))]
    """

    def __init__(self,
                 size: Tuple[float, float, float] = (1.0, 1.0, 1.0),
                 sites: Iterable[Site] = (),
                 edges: Iterable[Edge] = ()):
        size = tuple(float(s) for s in size)
        if len(size) != 3:
            raise ValueError(f"Lattice size must have 3 components, got {len(size)}")

        self._size = size
        self._sites = tuple(sites)
        self._edges = tuple(edges)

        for site in self._sites:
            if not isinstance(site, Site):
                raise TypeError(f"sites must be Site instances, got {type(site).__name__}")
        for edge in self._edges:
            if not isinstance(edge, Edge):
                raise TypeError(f"edges must be Edge instances, got {type(edge).__name__}")

        self.validate()

    @classmethod
    def new(cls, size: Tuple[float, float, float]) -> 'Lattice':
        """Empty lattice (no sites, no edges) of the given size."""
        return cls(size)

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------

    @property
    def size(self) -> Tuple[float, float, float]:
        return self._size

    @property
    def sites(self) -> Tuple[Site, ...]:
        return self._sites

    @property
    def edges(self) -> Tuple[Edge, ...]:
        return self._edges

    # Older documents call edges "vertices"
    vertices = edges

    @property
    def num_sites(self) -> int:
        return len(self._sites)

    @property
    def num_edges(self) -> int:
        return len(self._edges)

    def size_along(self, axis: Axis) -> float:
        return axis.component(self._size)

    def positions(self) -> np.ndarray:
        """
        Site positions as an array.

        Returns
        -------
        positions : np.ndarray, shape (num_sites, 3)
        """
        if not self._sites:
            return np.zeros((0, 3))
        return np.array([site.position for site in self._sites], dtype=float)

    def kinds(self) -> List[str]:
        return [site.kind for site in self._sites]

    # ------------------------------------------------------------------
    # Validation
    # ------------------------------------------------------------------

    def are_edges_consistent(self) -> bool:
        """True if every edge endpoint indexes an existing site."""
        n = len(self._sites)
        return all(edge.source < n and edge.target < n for edge in self._edges)

    def validate(self) -> 'Lattice':
        """
        Check the lattice invariants.

        Returns
        -------
        lattice : Lattice
            ``self``, so calls can be chained

        Raises
        ------
        InconsistentEdgesError
            If an edge references a site index ``>= num_sites``
        NegativeSizeError
            If any size component is ``< 0`` or not finite
        """
        if not self.are_edges_consistent():
            n = len(self._sites)
            bad = next(e for e in self._edges if e.source >= n or e.target >= n)
            raise InconsistentEdgesError(
                f"Edge {bad.source} -> {bad.target} references a site outside "
                f"the lattice ({n} sites)"
            )
        if any(not math.isfinite(s) or s < 0 for s in self._size):
            raise NegativeSizeError(f"Lattice size must be finite and non-negative, got {self._size}")
        return self

    # ------------------------------------------------------------------
    # Functional setters
    # ------------------------------------------------------------------

    def with_size(self, size: Tuple[float, float, float]) -> 'Lattice':
        return Lattice(size, self._sites, self._edges)

    def with_sites(self, sites: Iterable[Site]) -> 'Lattice':
        return Lattice(self._size, sites, self._edges)

    def with_edges(self, edges: Iterable[Edge]) -> 'Lattice':
        return Lattice(self._size, self._sites, edges)

    with_vertices = with_edges

    # ------------------------------------------------------------------
    # Periodicity
    # ------------------------------------------------------------------

    def drop_along(self, axis: Axis) -> 'Lattice':
        """
        Remove periodic boundary conditions along ``axis``.

        Every edge with a non-zero delta component along ``axis`` is removed.
        Sites and size are untouched.
        """
        axis = Axis.parse(axis)
        edges = [edge for edge in self._edges if not edge.is_periodic_along(axis)]
        logger.debug(f"drop along {axis.label}: {len(self._edges)} -> {len(edges)} edges")
        return Lattice(self._size, self._sites, edges)

    def drop_x(self) -> 'Lattice':
        return self.drop_along(Axis.X)

    def drop_y(self) -> 'Lattice':
        return self.drop_along(Axis.Y)

    def drop_z(self) -> 'Lattice':
        return self.drop_along(Axis.Z)

    def drop_all(self) -> 'Lattice':
        return self.drop_x().drop_y().drop_z()

    # ------------------------------------------------------------------
    # Expansion
    # ------------------------------------------------------------------

    def expand_along(self, axis: Axis, amount: int) -> 'Lattice':
        """
        Replicate the cell ``amount`` times along ``axis``.

        Parameters
        ----------
        axis : Axis
            Direction of the expansion
        amount : int
            Number of replicas, at least 1

        Returns
        -------
        lattice : Lattice
            Lattice with ``amount * num_sites`` sites, ``amount * num_edges``
            edges and size along ``axis`` multiplied by ``amount``.

        Notes
        -----
        Replicas are laid out replica-major: site ``k`` of replica ``i``
        gets index ``i * num_sites + k`` and is translated by
        ``i * size_along(axis)``. Edges are laid out the same way, each one
        rewired by ``Edge.move_along`` so that edges leaving the last replica
        wrap around to the first with a carried delta.

        Expanding by ``a`` and then by ``b`` gives the same lattice as
        expanding by ``a * b``.
        """
        axis = Axis.parse(axis)
        if isinstance(amount, bool) or int(amount) != amount or amount < 1:
            raise ValueError(f"Expansion amount must be a positive integer, got {amount!r}")
        amount = int(amount)

        step = self.size_along(axis)
        nsites = len(self._sites)

        sites = [
            site.move_along(axis, replica * step)
            for replica in range(amount)
            for site in self._sites
        ]
        edges = [
            edge.move_along(axis, replica, nsites, amount)
            for replica in range(amount)
            for edge in self._edges
        ]
        size = axis.replace(self._size, step * amount)

        logger.debug(
            f"expand along {axis.label} x{amount}: "
            f"{nsites} -> {len(sites)} sites, {len(self._edges)} -> {len(edges)} edges"
        )
        return Lattice(size, sites, edges)

    def expand_x(self, amount: int) -> 'Lattice':
        return self.expand_along(Axis.X, amount)

    def expand_y(self, amount: int) -> 'Lattice':
        return self.expand_along(Axis.Y, amount)

    def expand_z(self, amount: int) -> 'Lattice':
        return self.expand_along(Axis.Z, amount)

    def expand(self, x: int = 1, y: int = 1, z: int = 1) -> 'Lattice':
        """Expand along x, then y, then z."""
        return self.expand_x(x).expand_y(y).expand_z(z)

    def expand_all(self, amount: int) -> 'Lattice':
        """Expand by the same amount along every axis."""
        return self.expand(amount, amount, amount)

    # ------------------------------------------------------------------
    # Site filtering and substitution
    # ------------------------------------------------------------------

    def apply_mask(self,
                   mask: Mask,
                   axis: Axis = Axis.Z,
                   rng: Optional[np.random.Generator] = None) -> 'Lattice':
        """
        Remove sites according to a mask.

        Each site is projected onto the plane perpendicular to ``axis`` and
        kept with the probability the mask gives at that point. Exactly one
        random draw is made per site, in site order.

        Surviving sites keep their relative order and are renumbered densely.
        Edges touching a removed site are dropped; the rest are reindexed.

        Parameters
        ----------
        mask : Mask
            Keep-probability field
        axis : Axis, optional
            Normal of the projection plane (default: Z, i.e. the xy plane)
        rng : np.random.Generator, optional
            Random source. A fresh default generator is used when omitted.
        """
        axis = Axis.parse(axis)
        if rng is None:
            rng = np.random.default_rng()
        first, second = axis.others()

        keep = [
            mask.keep(first.component(site.position), second.component(site.position), rng)
            for site in self._sites
        ]
        index = reindex_table(keep)

        sites = [site for site, kept in zip(self._sites, keep) if kept]
        edges = [
            edge.reindex(index)
            for edge in self._edges
            if keep[edge.source] and keep[edge.target]
        ]

        logger.debug(
            f"mask on plane {first.label}{second.label}: "
            f"{len(self._sites)} -> {len(sites)} sites, "
            f"{len(self._edges)} -> {len(edges)} edges"
        )
        return Lattice(self._size, sites, edges)

    def alloy_sites(self,
                    source: str,
                    alloy: Alloy,
                    rng: Optional[np.random.Generator] = None) -> 'Lattice':
        """
        Replace sites of kind ``source`` with kinds drawn from ``alloy``.

        Each matching site draws independently; other sites are untouched.
        """
        if rng is None:
            rng = np.random.default_rng()
        matching = sum(1 for site in self._sites if site.kind == source)
        picks = iter(alloy.pick_many(matching, rng))

        sites = [
            site.with_kind(next(picks)) if site.kind == source else site
            for site in self._sites
        ]
        logger.debug(f"alloy {source} -> {alloy}: {matching} sites substituted")
        return Lattice(self._size, sites, self._edges)

    # ------------------------------------------------------------------
    # Serialization
    # ------------------------------------------------------------------

    def to_dict(self) -> Dict:
        """
        Serialize to a JSON-ready dictionary.

        Returns
        -------
        data : Dict
            ``{'size': [...], 'sites': [...], 'edges': [...]}``
        """
        return {
            'size': list(self._size),
            'sites': [site.to_dict() for site in self._sites],
            'edges': [edge.to_dict() for edge in self._edges],
        }

    @classmethod
    def from_dict(cls, data: Dict) -> 'Lattice':
        """
        Reconstruct and validate a lattice from a dictionary.

        Documents using the older ``vertices`` key instead of ``edges`` are
        accepted.

        Raises
        ------
        SerializationError
            If the document is structurally malformed
        InconsistentEdgesError, NegativeSizeError
            If the document is well formed but violates a lattice invariant
        """
        if not isinstance(data, dict):
            raise SerializationError(
                f"Lattice document must be an object, got {type(data).__name__}"
            )
        try:
            raw_size = data['size']
            raw_sites = data['sites']
            raw_edges = data['edges'] if 'edges' in data else data['vertices']
        except KeyError as err:
            raise SerializationError(f"Lattice document is missing key {err}") from err
        try:
            size = vector_from_json(raw_size, 'size')
        except ValueError as err:
            raise SerializationError(f"Invalid lattice size: {err}") from err
        if not isinstance(raw_sites, list) or not isinstance(raw_edges, list):
            raise SerializationError("Lattice 'sites' and 'edges' must be arrays")

        sites = [Site.from_dict(item) for item in raw_sites]
        edges = [Edge.from_dict(item) for item in raw_edges]
        return cls(size, sites, edges)

    @classmethod
    def from_json(cls, text: str) -> 'Lattice':
        """Parse and validate a lattice from its JSON text."""
        try:
            data = json.loads(text)
        except json.JSONDecodeError as err:
            raise SerializationError(f"Invalid lattice JSON: {err}") from err
        return cls.from_dict(data)

    # ------------------------------------------------------------------
    # Dunder
    # ------------------------------------------------------------------

    def __eq__(self, other) -> bool:
        if not isinstance(other, Lattice):
            return NotImplemented
        return (self._size == other._size
                and self._sites == other._sites
                and self._edges == other._edges)

    def __hash__(self):
        return hash((self._size, self._sites, self._edges))

    def __len__(self) -> int:
        return len(self._sites)

    def __repr__(self) -> str:
        x, y, z = self._size
        return (f"Lattice(size=({x:.3f}, {y:.3f}, {z:.3f}), "
                f"sites={len(self._sites)}, edges={len(self._edges)})")


def reindex_table(keep: Sequence[bool]) -> List[int]:
    """
    Build the ``old -> new`` index table for a site filter.

    Kept sites are numbered densely in their original order; removed sites
    map to their own old index (those entries are never read, since edges
    touching removed sites are dropped).

    >>> reindex_table([True, False, True])
    [0, 1, 1]
    """
    table = []
    counter = 0
    for old, kept in enumerate(keep):
        if kept:
            table.append(counter)
            counter += 1
        else:
            table.append(old)
    return table
