"""
Unit tests for the preset cubic cells.

Tests:
- Site and edge tables of sc, bcc and fcc
- Lattice parameter scaling and validation
- Name-based construction
"""

import numpy as np
import pytest

from vegas_lattice.core.lattice import LATTICE_REGISTRY, bcc, create_lattice, fcc, sc


def bond_lengths(lattice):
    """Real-space length of every edge, taking its delta into account."""
    positions = lattice.positions()
    size = np.array(lattice.size)
    lengths = []
    for edge in lattice.edges:
        vector = positions[edge.target] + np.array(edge.delta) * size - positions[edge.source]
        lengths.append(np.linalg.norm(vector))
    return np.array(lengths)


class TestSimpleCubic:
    """Test the sc cell."""

    def test_counts(self):
        lattice = sc(1.0)
        assert lattice.num_sites == 1
        assert lattice.num_edges == 3

    def test_edges_are_axis_self_loops(self):
        deltas = {edge.delta for edge in sc().edges}
        assert deltas == {(1, 0, 0), (0, 1, 0), (0, 0, 1)}
        assert all(edge.source == edge.target == 0 for edge in sc().edges)

    def test_bond_length(self):
        assert np.allclose(bond_lengths(sc(2.0)), 2.0)


class TestBodyCenteredCubic:
    """Test the bcc cell."""

    def test_counts(self):
        lattice = bcc(1.0)
        assert lattice.num_sites == 2
        assert lattice.num_edges == 8

    def test_body_center_position(self):
        lattice = bcc(2.0)
        assert lattice.sites[1].position == (1.0, 1.0, 1.0)
        assert lattice.kinds() == ['A', 'B']

    def test_all_edges_join_corner_to_center(self):
        assert all((e.source, e.target) == (0, 1) for e in bcc().edges)
        assert len({e.delta for e in bcc().edges}) == 8

    def test_bond_length(self):
        """All 8 neighbors at a√3/2."""
        assert np.allclose(bond_lengths(bcc(1.0)), np.sqrt(3) / 2)


class TestFaceCenteredCubic:
    """Test the fcc cell."""

    def test_counts(self):
        lattice = fcc(1.0)
        assert lattice.num_sites == 4
        assert lattice.num_edges == 12

    def test_each_face_has_four_edges(self):
        targets = [edge.target for edge in fcc().edges]
        assert targets.count(1) == targets.count(2) == targets.count(3) == 4

    def test_bond_length(self):
        """All 12 neighbors at a/√2."""
        assert np.allclose(bond_lengths(fcc(1.0)), 1 / np.sqrt(2))


class TestPresetParameters:
    """Test lattice parameter handling."""

    @pytest.mark.parametrize("factory", [sc, bcc, fcc])
    def test_size_follows_parameter(self, factory):
        assert factory(2.5).size == (2.5, 2.5, 2.5)

    @pytest.mark.parametrize("factory", [sc, bcc, fcc])
    @pytest.mark.parametrize("a", [0.0, -1.0])
    def test_non_positive_parameter_raises(self, factory, a):
        with pytest.raises(ValueError, match="Lattice parameter must be positive"):
            factory(a)


class TestCreateLattice:
    """Test the registry factory."""

    def test_registry_names(self):
        assert set(LATTICE_REGISTRY) == {'sc', 'bcc', 'fcc'}

    def test_create(self):
        assert create_lattice('fcc', a=3.0) == fcc(3.0)

    def test_unknown_raises(self):
        with pytest.raises(ValueError, match="Unknown lattice type"):
            create_lattice('hcp')
