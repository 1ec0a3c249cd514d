"""
Input/output adapters.

- serialization: JSON read/write (compact and pretty)
- export: flat per-site formats (xyz, tsv)
- config: YAML pipeline files
"""

from .serialization import (
    from_string,
    read_lattice,
    to_string,
    to_string_pretty,
    write_lattice,
)
from .export import export_sites, to_dataframe, write_sites
from .config import PipelineConfig

__all__ = [
    'from_string',
    'read_lattice',
    'to_string',
    'to_string_pretty',
    'write_lattice',
    'export_sites',
    'to_dataframe',
    'write_sites',
    'PipelineConfig',
]
