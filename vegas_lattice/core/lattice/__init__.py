"""
Lattice module.

This module provides the Lattice container with its structural transforms
(expand, drop, mask, alloy) and the preset cubic unit cells.

Available presets:
- sc:  simple cubic (1 site, 3 edges)
- bcc: body centered cubic (2 sites, 8 edges)
- fcc: face centered cubic (4 sites, 12 edges)
"""

from .base import Lattice, reindex_table
from .presets import (
    sc,
    bcc,
    fcc,
    LATTICE_REGISTRY,
    create_lattice
)

__all__ = [
    'Lattice',
    'reindex_table',
    'sc',
    'bcc',
    'fcc',
    'LATTICE_REGISTRY',
    'create_lattice',
]
