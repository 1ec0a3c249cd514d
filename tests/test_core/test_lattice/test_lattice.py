"""
Unit tests for Lattice construction, validation and periodicity.

Tests:
- Invariant checks (edge indices, non-negative size)
- Functional setters re-validate
- Dropping periodic boundary conditions
- Accessors (positions, kinds, repr)
"""

import numpy as np
import pytest

from vegas_lattice import (
    Axis,
    Edge,
    InconsistentEdgesError,
    Lattice,
    LatticeError,
    NegativeSizeError,
    Site,
)


class TestLatticeValidation:
    """Test that invalid lattices can never be built."""

    def test_valid_lattice(self, chain_cell):
        assert chain_cell.validate() is chain_cell

    def test_edge_target_out_of_range_raises(self):
        with pytest.raises(InconsistentEdgesError):
            Lattice((1, 1, 1), [Site('Fe')], [Edge(0, 1, (0, 0, 1))])

    def test_edge_source_out_of_range_raises(self):
        with pytest.raises(InconsistentEdgesError):
            Lattice((1, 1, 1), [Site('Fe')], [Edge(3, 0)])

    def test_negative_size_raises(self):
        with pytest.raises(NegativeSizeError):
            Lattice((1, 1, -1), [Site('Fe')])

    @pytest.mark.parametrize("bad", [float('nan'), float('inf')])
    def test_non_finite_size_raises(self, bad):
        with pytest.raises(NegativeSizeError):
            Lattice((bad, 1, 1))

    def test_zero_size_allowed(self):
        assert Lattice((0, 0, 0)).size == (0.0, 0.0, 0.0)

    def test_errors_share_base_class(self):
        with pytest.raises(LatticeError):
            Lattice((-1, 1, 1))

    def test_with_edges_revalidates(self, chain_cell):
        with pytest.raises(InconsistentEdgesError):
            chain_cell.with_edges([Edge(0, 2)])

    def test_with_sites_revalidates(self, two_site_cell):
        with pytest.raises(InconsistentEdgesError):
            two_site_cell.with_sites([Site('A')])

    def test_with_size_revalidates(self, chain_cell):
        with pytest.raises(NegativeSizeError):
            chain_cell.with_size((1, -2, 1))

    def test_non_site_rejected(self):
        with pytest.raises(TypeError):
            Lattice((1, 1, 1), ['Fe'])

    def test_new_is_empty(self):
        lattice = Lattice.new((2.0, 2.0, 2.0))
        assert lattice.num_sites == 0
        assert lattice.num_edges == 0


class TestLatticeDrop:
    """Test removing periodic boundary conditions."""

    def test_drop_keeps_edges_not_periodic_on_axis(self):
        lattice = Lattice((1, 1, 1), [Site('Fe')], [Edge(0, 0, (0, 0, 1))])
        assert lattice.drop_x().num_edges == 1

    def test_drop_removes_periodic_edges(self):
        lattice = Lattice((1, 1, 1), [Site('Fe')], [Edge(0, 0, (0, 0, 1))])
        assert lattice.drop_z().num_edges == 0

    def test_drop_is_selective(self, two_site_cell):
        dropped = two_site_cell.drop_along(Axis.X)
        assert dropped.edges == (
            Edge(0, 1, (0, 0, 0)),
            Edge(0, 0, (0, 0, 1), tags=['core']),
        )
        assert dropped.sites == two_site_cell.sites
        assert dropped.size == two_site_cell.size

    def test_drop_is_idempotent(self, two_site_cell):
        once = two_site_cell.drop_z()
        assert once.drop_z() == once

    def test_drop_all_leaves_internal_edges(self, two_site_cell):
        assert two_site_cell.drop_all().edges == (Edge(0, 1, (0, 0, 0)),)

    def test_drop_accepts_axis_names(self, two_site_cell):
        assert two_site_cell.drop_along('z') == two_site_cell.drop_z()

    def test_input_unchanged(self, two_site_cell):
        two_site_cell.drop_all()
        assert two_site_cell.num_edges == 4


class TestLatticeAccessors:
    """Test read-only views."""

    def test_positions(self, two_site_cell):
        assert np.allclose(two_site_cell.positions(), [[0, 0, 0], [0.5, 0.5, 0.5]])

    def test_positions_empty(self):
        assert Lattice.new((1, 1, 1)).positions().shape == (0, 3)

    def test_kinds(self, two_site_cell):
        assert two_site_cell.kinds() == ['A', 'B']

    def test_vertices_alias(self, chain_cell):
        assert chain_cell.vertices == chain_cell.edges

    def test_size_along(self, two_site_cell):
        assert two_site_cell.size_along(Axis.Y) == 2.0

    def test_repr(self, two_site_cell):
        text = repr(two_site_cell)
        assert "Lattice" in text
        assert "sites=2" in text
        assert "edges=4" in text

    def test_equality(self, chain_cell):
        copy = Lattice(chain_cell.size, chain_cell.sites, chain_cell.edges)
        assert copy == chain_cell
        assert hash(copy) == hash(chain_cell)
