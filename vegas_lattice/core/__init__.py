"""
Core domain models for vegas_lattice.

This module contains the fundamental abstractions:
- Axis: the three cartesian directions
- Site, Edge: the immutable building blocks of a unit cell
- Alloy: weighted random choice of site kinds
- Mask: image-backed keep probability over a plane
- Lattice: sites + edges + size, with expand/drop/mask/alloy transforms

Everything here is pure: transforms return new objects and randomness is
passed in explicitly.
"""

from .util import Axis, Tagged, floor_divmod

from .site import Site
from .edge import Edge, Vertex
from .alloy import Alloy
from .mask import Mask

from .lattice import (
    Lattice,
    sc,
    bcc,
    fcc,
    LATTICE_REGISTRY,
    create_lattice
)

__all__ = [
    # Helpers
    'Axis',
    'Tagged',
    'floor_divmod',

    # Building blocks
    'Site',
    'Edge',
    'Vertex',
    'Alloy',
    'Mask',

    # Lattice
    'Lattice',
    'sc',
    'bcc',
    'fcc',
    'LATTICE_REGISTRY',
    'create_lattice',
]
