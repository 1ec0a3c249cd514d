"""
Command line interface: ``vegas-lattice``.

Every command reads a lattice (from a file argument or standard input),
transforms it and writes compact JSON to standard output, so commands can be
chained with pipes:

    vegas-lattice bcc -a 2.87 | vegas-lattice expand -x 10 -y 10 | vegas-lattice drop -z

Log messages go to standard error (``-v`` for INFO, ``-vv`` for DEBUG).
"""

import argparse
import logging
import math
import sys
from typing import List, Optional

import numpy as np

from . import __version__
from .core import LATTICE_REGISTRY, Alloy, Axis, Mask, create_lattice
from .errors import InvalidRatiosError, LatticeError
from .io import PipelineConfig, read_lattice, write_lattice, write_sites
from .logging_utils import configure_logging, verbosity_to_level

logger = logging.getLogger(__name__)

USAGE = "Vegas lattice helps you to manipulate lattices."


def positive_int(text: str) -> int:
    value = int(text)
    if value < 1:
        raise argparse.ArgumentTypeError(f"expected a positive integer, got {text}")
    return value


def positive_float(text: str) -> float:
    value = float(text)
    if not value > 0 or not math.isfinite(value):
        raise argparse.ArgumentTypeError(f"expected a positive finite number, got {text}")
    return value


def seed_int(text: str) -> int:
    value = int(text)
    if value < 0:
        raise argparse.ArgumentTypeError(f"expected a non-negative seed, got {text}")
    return value


# ----------------------------------------------------------------------
# Commands
# ----------------------------------------------------------------------

def cmd_preset(args) -> None:
    write_lattice(create_lattice(args.command, a=args.lattice_parameter))


def cmd_check(args) -> None:
    write_lattice(read_lattice(args.input))


def cmd_pretty(args) -> None:
    write_lattice(read_lattice(args.input), pretty=True)


def cmd_drop(args) -> None:
    lattice = read_lattice(args.input)
    for axis in Axis:
        if getattr(args, axis.label):
            lattice = lattice.drop_along(axis)
    write_lattice(lattice)


def cmd_expand(args) -> None:
    lattice = read_lattice(args.input)
    for axis in Axis:
        amount = getattr(args, axis.label)
        if amount is not None:
            lattice = lattice.expand_along(axis, amount)
    write_lattice(lattice)


def cmd_alloy(args) -> None:
    if not args.target:
        raise InvalidRatiosError("No alloy target provided (use -t KIND RATIO)")
    targets = []
    for kind, ratio in args.target:
        try:
            targets.append((kind, int(ratio)))
        except ValueError as err:
            raise InvalidRatiosError(f"Ratio for '{kind}' must be an integer, got '{ratio}'") from err
    alloy = Alloy.from_targets(targets)

    lattice = read_lattice(args.input)
    rng = np.random.default_rng(args.seed)
    write_lattice(lattice.alloy_sites(args.source, alloy, rng))


def cmd_mask(args) -> None:
    mask = Mask.from_path(args.mask, args.ppu)
    lattice = read_lattice(args.input)
    rng = np.random.default_rng(args.seed)
    write_lattice(lattice.apply_mask(mask, Axis.parse(args.axis), rng))


def cmd_into(args) -> None:
    write_sites(read_lattice(args.input), args.format)


def cmd_build(args) -> None:
    config = PipelineConfig.from_yaml(args.config)
    config.write(config.run())


# ----------------------------------------------------------------------
# Parser
# ----------------------------------------------------------------------

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='vegas-lattice',
        description=USAGE,
        formatter_class=argparse.ArgumentDefaultsHelpFormatter
    )
    parser.add_argument('--version', action='version', version=f"%(prog)s {__version__}")
    parser.add_argument(
        '--verbose', '-v',
        action='count',
        default=0,
        help="Increase log verbosity (repeat for debug output)"
    )
    subparsers = parser.add_subparsers(dest='command', metavar='COMMAND')
    subparsers.required = True

    descriptions = {
        'sc': "Simple cubic lattice",
        'bcc': "Body centered cubic lattice",
        'fcc': "Face centered cubic lattice",
    }
    for name in LATTICE_REGISTRY:
        sub = subparsers.add_parser(name, help=descriptions.get(name, f"{name} lattice"),
                                    formatter_class=argparse.ArgumentDefaultsHelpFormatter)
        sub.add_argument('--lattice-parameter', '-a', type=positive_float, default=1.0,
                         help="Lattice parameter")
        sub.set_defaults(func=cmd_preset)

    sub = subparsers.add_parser('check', help="Check lattice")
    sub.add_argument('input', nargs='?', help="Input file (standard input if omitted)")
    sub.set_defaults(func=cmd_check)

    sub = subparsers.add_parser('pretty', help="Pretty print lattice")
    sub.add_argument('input', nargs='?', help="Input file (standard input if omitted)")
    sub.set_defaults(func=cmd_pretty)

    sub = subparsers.add_parser('drop', help="Drop periodic boundary conditions")
    sub.add_argument('input', nargs='?', help="Input file (standard input if omitted)")
    for flag, axis in Axis.labels('along-').items():
        sub.add_argument(f"-{axis.label}", f"--{flag}", dest=axis.label, action='store_true',
                         help=f"Drop periodic boundary conditions along {axis.label}-axis")
    sub.set_defaults(func=cmd_drop)

    sub = subparsers.add_parser('expand', help="Expand lattice")
    sub.add_argument('input', nargs='?', help="Input file (standard input if omitted)")
    for flag, axis in Axis.labels('along-').items():
        sub.add_argument(f"-{axis.label}", f"--{flag}", dest=axis.label, type=positive_int,
                         metavar='N', help=f"Expand lattice along {axis.label}-axis")
    sub.set_defaults(func=cmd_expand)

    sub = subparsers.add_parser('alloy', help="Alloy lattice")
    sub.add_argument('source', help="Source kind")
    sub.add_argument('input', nargs='?', help="Input file (standard input if omitted)")
    sub.add_argument('--target', '-t', nargs=2, action='append', metavar=('KIND', 'RATIO'),
                     help="Target kind with its corresponding ratio (repeatable)")
    sub.add_argument('--seed', type=seed_int, default=None, help="Random seed")
    sub.set_defaults(func=cmd_alloy)

    sub = subparsers.add_parser('mask', help="Mask lattice",
                                formatter_class=argparse.ArgumentDefaultsHelpFormatter)
    sub.add_argument('mask', help="Mask image file")
    sub.add_argument('input', nargs='?', help="Input file (standard input if omitted)")
    sub.add_argument('--ppu', '-p', type=positive_float, default=10.0, help="Pixels per unit")
    sub.add_argument('--axis', choices=['x', 'y', 'z'], default='z',
                     help="Normal of the plane the mask is projected on")
    sub.add_argument('--seed', type=seed_int, default=None, help="Random seed")
    sub.set_defaults(func=cmd_mask)

    sub = subparsers.add_parser('into', help="Convert lattice into a different format")
    sub.add_argument('format', choices=['xyz', 'tsv'], help="Output format")
    sub.add_argument('input', nargs='?', help="Input file (standard input if omitted)")
    sub.set_defaults(func=cmd_into)

    sub = subparsers.add_parser('build', help="Run a YAML pipeline configuration")
    sub.add_argument('config', help="Pipeline configuration file")
    sub.set_defaults(func=cmd_build)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """
    Entry point. Returns the process exit status.

    Errors are reported on standard error as ``Error: ...`` followed by
    ``Cause: ...`` when the error wraps another one.
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(verbosity_to_level(args.verbose))

    try:
        args.func(args)
    except LatticeError as err:
        logger.debug("Command failed", exc_info=True)
        print(f"Error: {err}", file=sys.stderr)
        if err.__cause__ is not None:
            print(f"Cause: {err.__cause__}", file=sys.stderr)
        return 1
    return 0


if __name__ == '__main__':
    sys.exit(main())
