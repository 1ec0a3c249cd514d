"""
Vegas Lattice: building and transforming 3D crystal lattices

A Python package for preparing periodic lattices for spin and Monte Carlo
simulations. A lattice is a unit cell (sites + periodic edges + box size)
that can be grown, cut, sculpted with image masks and alloyed.

Main Components
---------------
core : Domain models (Axis, Site, Edge, Alloy, Mask, Lattice) and presets
io : JSON serialization, flat exports (xyz, tsv), YAML pipeline configs
cli : The ``vegas-lattice`` command line tool

Quick Start
-----------
>>> import numpy as np
>>> from vegas_lattice import bcc, Alloy
>>>
>>> # 10 x 10 x 2 bcc film without periodicity along z
>>> film = bcc(2.87).expand(10, 10, 2).drop_z()
>>>
>>> # Replace the body centers by a 3:1 Fe/Ni mix
>>> rng = np.random.default_rng(42)
>>> film = film.alloy_sites('B', Alloy(['Fe', 'Ni'], [3, 1]), rng)
>>> print(film)
Lattice(size=(28.700, 28.700, 5.740), sites=400, edges=...)
"""

__version__ = "0.6.0"

# High-level API exports
from .core import (
    # Helpers
    Axis,

    # Building blocks
    Site,
    Edge,
    Vertex,
    Alloy,
    Mask,

    # Lattice
    Lattice,
    sc,
    bcc,
    fcc,
    create_lattice,
)

from .errors import (
    LatticeError,
    InconsistentEdgesError,
    NegativeSizeError,
    InvalidRatiosError,
    SerializationError,
    LatticeIOError,
    ImageReadError,
    ConfigError,
)

__all__ = [
    # Version info
    '__version__',

    # Core
    'Axis',
    'Site',
    'Edge',
    'Vertex',
    'Alloy',
    'Mask',
    'Lattice',
    'sc',
    'bcc',
    'fcc',
    'create_lattice',

    # Errors
    'LatticeError',
    'InconsistentEdgesError',
    'NegativeSizeError',
    'InvalidRatiosError',
    'SerializationError',
    'LatticeIOError',
    'ImageReadError',
    'ConfigError',
]
