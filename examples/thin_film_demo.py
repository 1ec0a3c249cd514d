"""
Thin Film Demo

This example walks through the lattice workflow:
- Preset unit cells (sc, bcc, fcc)
- Expansion into supercells and dropping periodicity
- Alloying and image masks with a seeded random generator
- JSON and xyz output

Run from the repository root:
    python examples/thin_film_demo.py
"""

import sys
from pathlib import Path

import numpy as np

# Add vegas_lattice to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from vegas_lattice import Alloy, Axis, Mask, bcc, sc
from vegas_lattice.io import export_sites, to_string_pretty


def example_supercell():
    """Example 1: bcc iron supercell."""
    print("=" * 60)
    print("Example 1: bcc Fe supercell")
    print("=" * 60)

    cell = bcc(2.87)
    print(f"\nUnit cell: {cell}")
    for site in cell.sites:
        print(f"  {site.kind} at {site.position}")

    supercell = cell.expand(4, 4, 2)
    print(f"\nSupercell: {supercell}")

    # Every site keeps 8 neighbors while all axes are periodic
    degree = np.zeros(supercell.num_sites, dtype=int)
    for edge in supercell.edges:
        degree[edge.source] += 1
        degree[edge.target] += 1
    print(f"Coordination numbers: {sorted(set(degree))}")

    film = supercell.drop_z()
    print(f"\nAfter dropping z periodicity: {film}")
    print(f"  {supercell.num_edges - film.num_edges} edges crossed the z boundary")

    return film


def example_alloy(film, rng):
    """Example 2: FeNi random alloy."""
    print("\n" + "=" * 60)
    print("Example 2: Random Fe80Ni20 alloy")
    print("=" * 60)

    alloy = Alloy(['Fe', 'Ni'], [80, 20])
    print(f"\nAlloy: {alloy}")
    print(f"Probabilities: {alloy.probabilities}")

    alloyed = film.alloy_sites('A', alloy, rng)
    kinds = alloyed.kinds()
    for kind in ('Fe', 'Ni', 'B'):
        print(f"  {kind}: {kinds.count(kind)} sites")

    return alloyed


def example_mask(rng):
    """Example 3: circular dot cut out of a square film."""
    print("\n" + "=" * 60)
    print("Example 3: Masked simple cubic film")
    print("=" * 60)

    # 20x20 pixel disk, 2 pixels per unit covers a 10x10 film
    yy, xx = np.mgrid[0:20, 0:20]
    disk = ((xx - 9.5) ** 2 + (yy - 9.5) ** 2 <= 9.0 ** 2) * 255
    mask = Mask(disk, ppu=2.0)
    print(f"\nMask: {mask}")

    film = sc(1.0).expand(10, 10, 1).drop_all()
    dot = film.apply_mask(mask, Axis.Z, rng)
    print(f"Film: {film}")
    print(f"Dot:  {dot}")
    print(f"Kept fraction: {dot.num_sites / film.num_sites:.2f} (disk area ratio {np.pi / 4:.2f})")

    return dot


def example_output(lattice):
    """Example 4: writing results."""
    print("\n" + "=" * 60)
    print("Example 4: Output formats")
    print("=" * 60)

    text = to_string_pretty(lattice)
    print("\nPretty JSON (first lines):")
    for line in text.splitlines()[:12]:
        print(f"  {line}")

    print("\nxyz (first lines):")
    for line in export_sites(lattice, 'xyz').splitlines()[:5]:
        print(f"  {line}")


def main():
    rng = np.random.default_rng(42)

    film = example_supercell()
    example_alloy(film, rng)
    dot = example_mask(rng)
    example_output(dot)

    print("\n" + "=" * 60)
    print("Done")
    print("=" * 60)


if __name__ == "__main__":
    main()
