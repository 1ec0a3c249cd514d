"""
Shared fixtures for the vegas_lattice test suite.
"""

import numpy as np
import pytest
from PIL import Image

from vegas_lattice import Edge, Lattice, Site


@pytest.fixture
def rng():
    """Deterministic random generator."""
    return np.random.default_rng(1234)


@pytest.fixture
def chain_cell():
    """Single Fe site with one periodic edge along +x."""
    return Lattice((1.0, 1.0, 1.0), [Site('Fe')], [Edge(0, 0, (1, 0, 0))])


@pytest.fixture
def two_site_cell():
    """Two-site cell with edges inside the cell and across x and z boundaries."""
    sites = [
        Site('A'),
        Site('B', (0.5, 0.5, 0.5)),
    ]
    edges = [
        Edge(0, 1, (0, 0, 0)),
        Edge(1, 0, (1, 0, 0)),
        Edge(0, 0, (0, 0, 1), tags=['core']),
        Edge(1, 1, (-1, 0, -1)),
    ]
    return Lattice((1.0, 2.0, 3.0), sites, edges)


def write_alpha_image(path, alpha):
    """Save a uint8 alpha array as an RGBA PNG (row 0 is the top of the image)."""
    alpha = np.asarray(alpha, dtype=np.uint8)
    rgba = np.zeros(alpha.shape + (4,), dtype=np.uint8)
    rgba[:, :, 3] = alpha
    Image.fromarray(rgba).save(path)
    return path


@pytest.fixture
def half_mask_path(tmp_path):
    """
    2x2 image: top row transparent, bottom row opaque.

    With ppu=1 this keeps every site with 0 <= y mod 2 < 1 and drops every
    site with 1 <= y mod 2 < 2.
    """
    return write_alpha_image(tmp_path / 'half.png', [[0, 0], [255, 255]])
