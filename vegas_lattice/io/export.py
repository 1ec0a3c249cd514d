"""
Flat per-site exports.

Supported formats:
- xyz: ``kind x y z`` per line
- tsv: ``x<TAB>y<TAB>z<TAB>kind`` per line

Edges are not exported; these formats only carry coordinates and kinds.
"""

import sys
from typing import Optional, TextIO

import pandas as pd

from ..core.lattice import Lattice

EXPORT_COLUMNS = {
    'xyz': (['kind', 'x', 'y', 'z'], ' '),
    'tsv': (['x', 'y', 'z', 'kind'], '\t'),
}


def to_dataframe(lattice: Lattice) -> pd.DataFrame:
    """
    Site table of ``lattice``.

    Returns
    -------
    df : pd.DataFrame
        One row per site, columns ``kind, x, y, z``, in site order
    """
    positions = lattice.positions()
    return pd.DataFrame({
        'kind': lattice.kinds(),
        'x': positions[:, 0],
        'y': positions[:, 1],
        'z': positions[:, 2],
    })


def export_sites(lattice: Lattice, fmt: str) -> str:
    """
    Render the sites of ``lattice`` in a flat text format.

    Parameters
    ----------
    lattice : Lattice
    fmt : str
        'xyz' or 'tsv'

    Returns
    -------
    text : str
        One line per site, newline terminated (empty for an empty lattice)
    """
    if fmt not in EXPORT_COLUMNS:
        available = ', '.join(EXPORT_COLUMNS)
        raise ValueError(f"Unknown export format '{fmt}'. Available formats: {available}")

    columns, sep = EXPORT_COLUMNS[fmt]
    if lattice.num_sites == 0:
        return ''
    df = to_dataframe(lattice)[columns]
    return df.to_csv(sep=sep, header=False, index=False, lineterminator='\n')


def write_sites(lattice: Lattice, fmt: str, target: Optional[TextIO] = None) -> None:
    """Write ``export_sites(lattice, fmt)`` to ``target`` (standard output by default)."""
    stream = sys.stdout if target is None else target
    stream.write(export_sites(lattice, fmt))
