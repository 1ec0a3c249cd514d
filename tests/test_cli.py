"""
Tests for the vegas-lattice command line interface.
"""

import io
import json

import pytest

from vegas_lattice import __version__, bcc, fcc, sc
from vegas_lattice.cli import build_parser, main
from vegas_lattice.io import from_string, to_string, write_lattice


def run(capsys, *argv):
    """Run the CLI and return (exit status, stdout, stderr)."""
    status = main(list(argv))
    captured = capsys.readouterr()
    return status, captured.out, captured.err


@pytest.fixture
def cell_path(tmp_path):
    path = tmp_path / 'cell.json'
    write_lattice(sc(), path)
    return path


class TestPresets:
    """Test preset commands."""

    @pytest.mark.parametrize("name, factory", [('sc', sc), ('bcc', bcc), ('fcc', fcc)])
    def test_default_parameter(self, capsys, name, factory):
        status, out, _ = run(capsys, name)
        assert status == 0
        assert out == to_string(factory()) + '\n'

    def test_lattice_parameter(self, capsys):
        _, out, _ = run(capsys, 'bcc', '-a', '2.87')
        assert from_string(out) == bcc(2.87)

    def test_non_positive_parameter_rejected(self, capsys):
        with pytest.raises(SystemExit) as exc:
            main(['sc', '-a', '0'])
        assert exc.value.code == 2


class TestTransforms:
    """Test commands reading a lattice."""

    def test_check_from_stdin(self, capsys, monkeypatch):
        monkeypatch.setattr('sys.stdin', io.StringIO(to_string(fcc())))
        status, out, _ = run(capsys, 'check')
        assert status == 0
        assert from_string(out) == fcc()

    def test_pretty(self, capsys, cell_path):
        _, out, _ = run(capsys, 'pretty', str(cell_path))
        assert out.startswith('{\n  "size": [\n')
        assert from_string(out) == sc()

    def test_drop(self, capsys, cell_path):
        _, out, _ = run(capsys, 'drop', str(cell_path), '-x', '--along-z')
        assert from_string(out) == sc().drop_x().drop_z()

    def test_drop_without_axes_is_noop(self, capsys, cell_path):
        _, out, _ = run(capsys, 'drop', str(cell_path))
        assert from_string(out) == sc()

    def test_expand(self, capsys, cell_path):
        _, out, _ = run(capsys, 'expand', str(cell_path), '-x', '3', '--along-z', '2')
        assert from_string(out) == sc().expand(3, 1, 2)

    def test_expand_rejects_zero(self, cell_path):
        with pytest.raises(SystemExit):
            main(['expand', str(cell_path), '-y', '0'])

    def test_alloy(self, capsys, tmp_path):
        path = tmp_path / 'big.json'
        write_lattice(sc().expand_all(3), path)
        _, out, _ = run(capsys, 'alloy', 'A', str(path), '-t', 'Fe', '1', '-t', 'Ni', '1', '--seed', '4')
        lattice = from_string(out)
        assert set(lattice.kinds()) == {'Fe', 'Ni'}

        _, again, _ = run(capsys, 'alloy', 'A', str(path), '-t', 'Fe', '1', '-t', 'Ni', '1', '--seed', '4')
        assert again == out

    def test_mask(self, capsys, tmp_path, half_mask_path):
        path = tmp_path / 'plane.json'
        write_lattice(sc().expand(2, 4, 1), path)
        _, out, _ = run(capsys, 'mask', str(half_mask_path), str(path), '--ppu', '1', '--seed', '0')
        lattice = from_string(out)
        assert lattice.num_sites == 4
        assert sorted({site.position[1] for site in lattice.sites}) == [0.0, 2.0]

    @pytest.mark.parametrize("fmt, first_line", [('xyz', 'A 0.0 0.0 0.0'), ('tsv', '0.0\t0.0\t0.0\tA')])
    def test_into(self, capsys, cell_path, fmt, first_line):
        _, out, _ = run(capsys, 'into', fmt, str(cell_path))
        assert out == first_line + '\n'

    def test_build(self, capsys, tmp_path):
        config = tmp_path / 'pipeline.yaml'
        config.write_text("lattice:\n  preset: bcc\nsteps:\n  - expand: 2\n")
        status, out, _ = run(capsys, 'build', str(config))
        assert status == 0
        assert from_string(out) == bcc().expand_all(2)


class TestErrors:
    """Test error reporting."""

    def test_missing_file(self, capsys, tmp_path):
        status, out, err = run(capsys, 'check', str(tmp_path / 'missing.json'))
        assert status == 1
        assert out == ''
        assert err.startswith('Error: Could not read lattice file')
        assert '\nCause: ' in err

    def test_non_utf8_file(self, capsys, tmp_path):
        path = tmp_path / 'cell.json'
        path.write_bytes(b'\xff\xfe{"size"')
        status, out, err = run(capsys, 'check', str(path))
        assert status == 1
        assert out == ''
        assert err.startswith('Error: ')
        assert '\nCause: ' in err

    def test_malformed_vector(self, capsys, monkeypatch):
        document = {'size': '123', 'sites': [], 'edges': []}
        monkeypatch.setattr('sys.stdin', io.StringIO(json.dumps(document)))
        status, _, err = run(capsys, 'check')
        assert status == 1
        assert err.startswith('Error: Invalid lattice size')

    def test_invalid_document(self, capsys, monkeypatch):
        document = {'size': [1, 1, 1], 'sites': [], 'edges': [{'source': 0, 'target': 0, 'delta': [0, 0, 0]}]}
        monkeypatch.setattr('sys.stdin', io.StringIO(json.dumps(document)))
        status, _, err = run(capsys, 'check')
        assert status == 1
        assert err.startswith('Error: Edge 0 -> 0 references a site outside the lattice')
        assert 'Cause' not in err

    def test_alloy_without_targets(self, capsys, cell_path):
        status, _, err = run(capsys, 'alloy', 'A', str(cell_path))
        assert status == 1
        assert 'No alloy target provided' in err

    def test_alloy_bad_ratio(self, capsys, cell_path):
        status, _, err = run(capsys, 'alloy', 'A', str(cell_path), '-t', 'Fe', 'lots')
        assert status == 1
        assert "Ratio for 'Fe' must be an integer" in err
        assert 'Cause: ' in err

    def test_unreadable_mask(self, capsys, tmp_path, cell_path):
        bogus = tmp_path / 'mask.png'
        bogus.write_text('not an image')
        status, _, err = run(capsys, 'mask', str(bogus), str(cell_path))
        assert status == 1
        assert err.startswith('Error: ')


class TestParser:
    """Test parser wiring."""

    def test_version(self, capsys):
        with pytest.raises(SystemExit) as exc:
            main(['--version'])
        assert exc.value.code == 0
        assert __version__ in capsys.readouterr().out

    @pytest.mark.parametrize("ppu", ['0', 'inf', 'nan'])
    def test_mask_ppu_must_be_finite(self, half_mask_path, ppu):
        with pytest.raises(SystemExit) as exc:
            main(['mask', str(half_mask_path), '--ppu', ppu])
        assert exc.value.code == 2

    def test_negative_seed_rejected(self):
        with pytest.raises(SystemExit) as exc:
            main(['alloy', 'A', '-t', 'Fe', '1', '--seed', '-1'])
        assert exc.value.code == 2

    def test_command_required(self):
        with pytest.raises(SystemExit):
            main([])

    def test_verbosity_count(self):
        args = build_parser().parse_args(['-vv', 'sc'])
        assert args.verbose == 2
