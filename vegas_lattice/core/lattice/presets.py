"""
Preset cubic unit cells.

This module provides the canonical cubic Bravais cells as Lattice objects:
- sc:  simple cubic
- bcc: body centered cubic
- fcc: face centered cubic

The edge tables are fixed lookup tables encoding the crystallographic motif
(nearest neighbors), not computed from geometry. Each bond is listed once,
in one direction only.
"""

from typing import Callable, Dict

from .base import Lattice
from ..edge import Edge
from ..site import Site


def _check_parameter(a: float) -> float:
    if not a > 0:
        raise ValueError("Lattice parameter must be positive")
    return float(a)


def sc(a: float = 1.0) -> Lattice:
    """
    Simple cubic cell.

    One site ('A') at the origin and three periodic self loops along
    x, y and z. Coordination number 6.

    Parameters
    ----------
    a : float, optional
        Lattice parameter (default: 1.0)
    """
    a = _check_parameter(a)
    sites = [Site('A')]
    edges = [
        Edge(0, 0, (1, 0, 0)),
        Edge(0, 0, (0, 1, 0)),
        Edge(0, 0, (0, 0, 1)),
    ]
    return Lattice((a, a, a), sites, edges)


def bcc(a: float = 1.0) -> Lattice:
    """
    Body centered cubic cell.

    Geometry
    --------
    Corner site 'A' at (0, 0, 0), body center 'B' at (a/2, a/2, a/2).
    The 8 edges join the corner site to the body center of the cell it
    belongs to and of the 7 neighboring cells sharing that corner, so every
    site has 8 nearest neighbors at distance a√3/2.

    Parameters
    ----------
    a : float, optional
        Lattice parameter (default: 1.0)
    """
    a = _check_parameter(a)
    sites = [
        Site('A'),
        Site('B', (0.5 * a, 0.5 * a, 0.5 * a)),
    ]
    edges = [
        Edge(0, 1, (0, 0, 0)),
        Edge(0, 1, (0, -1, 0)),
        Edge(0, 1, (-1, 0, 0)),
        Edge(0, 1, (-1, -1, 0)),
        Edge(0, 1, (0, 0, -1)),
        Edge(0, 1, (0, -1, -1)),
        Edge(0, 1, (-1, 0, -1)),
        Edge(0, 1, (-1, -1, -1)),
    ]
    return Lattice((a, a, a), sites, edges)


def fcc(a: float = 1.0) -> Lattice:
    """
    Face centered cubic cell.

    Geometry
    --------
    Corner site 'A' at the origin and three face centers:
        'B' = (a/2, a/2, 0)   xy face
        'C' = (a/2, 0, a/2)   xz face
        'D' = (0, a/2, a/2)   yz face

    The corner site is joined to the 4 images of each face center in its
    face plane, 12 edges in total (distance a/√2).

    Parameters
    ----------
    a : float, optional
        Lattice parameter (default: 1.0)
    """
    a = _check_parameter(a)
    sites = [
        Site('A'),
        Site('B', (0.5 * a, 0.5 * a, 0.0)),
        Site('C', (0.5 * a, 0.0, 0.5 * a)),
        Site('D', (0.0, 0.5 * a, 0.5 * a)),
    ]
    edges = [
        # xy plane
        Edge(0, 1, (0, 0, 0)),
        Edge(0, 1, (-1, 0, 0)),
        Edge(0, 1, (-1, -1, 0)),
        Edge(0, 1, (0, -1, 0)),
        # xz plane
        Edge(0, 2, (0, 0, 0)),
        Edge(0, 2, (-1, 0, 0)),
        Edge(0, 2, (-1, 0, -1)),
        Edge(0, 2, (0, 0, -1)),
        # yz plane
        Edge(0, 3, (0, 0, 0)),
        Edge(0, 3, (0, -1, 0)),
        Edge(0, 3, (0, -1, -1)),
        Edge(0, 3, (0, 0, -1)),
    ]
    return Lattice((a, a, a), sites, edges)


# Preset registry for name-based construction (CLI, pipeline configs)
LATTICE_REGISTRY: Dict[str, Callable[..., Lattice]] = {
    'sc': sc,
    'bcc': bcc,
    'fcc': fcc,
}


def create_lattice(lattice_type: str, **kwargs) -> Lattice:
    """
    Factory function to create preset cells from string names.

    Parameters
    ----------
    lattice_type : str
        Preset name ('sc', 'bcc', 'fcc')
    **kwargs
        Passed to the preset (e.g. a=2.5)

    Returns
    -------
    lattice : Lattice

    Raises
    ------
    ValueError
        If lattice_type is not recognized

    Examples
    --------
    >>> create_lattice('bcc', a=2.0).num_sites
    2
    """
    if lattice_type not in LATTICE_REGISTRY:
        available = ', '.join(LATTICE_REGISTRY.keys())
        raise ValueError(f"Unknown lattice type '{lattice_type}'. "
                         f"Available types: {available}")

    return LATTICE_REGISTRY[lattice_type](**kwargs)
