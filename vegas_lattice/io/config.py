"""
YAML pipeline configuration.

A pipeline file names a starting lattice and the transforms to apply to it:

    lattice:
      preset: bcc              # sc | bcc | fcc
      lattice_parameter: 2.87
      # input: cell.json       # alternatively, a lattice file

    steps:
      - expand: {x: 10, y: 10, z: 2}
      - drop: [z]
      - mask: {image: logo.png, ppu: 10, axis: z}
      - alloy: {source: A, targets: {Fe: 80, Ni: 20}}

    seed: 42                   # optional

    output:
      path: film.json          # optional, standard output when omitted
      pretty: true

Relative paths are resolved against the directory of the configuration file.
"""

import logging
import math
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple, Union

import numpy as np
import yaml

from ..core import LATTICE_REGISTRY, Alloy, Axis, Lattice, Mask, create_lattice
from ..errors import ConfigError, LatticeIOError
from .serialization import read_lattice, write_lattice

logger = logging.getLogger(__name__)

STEP_TYPES = ('expand', 'drop', 'mask', 'alloy')


@dataclass
class PipelineConfig:
    """
    A parsed pipeline: where the lattice comes from and what to do with it.

    Attributes
    ----------
    preset : str or None
        Preset cell name, mutually exclusive with ``input``
    lattice_parameter : float
        Parameter passed to the preset
    input : Path or None
        Lattice file to start from
    steps : List[Tuple[str, Any]]
        ``(step_type, parameters)`` pairs, applied in order
    seed : int or None
        Seed for the random generator used by mask and alloy steps
    output : Path or None
        Where ``write()`` puts the result (standard output if None)
    pretty : bool
        Pretty JSON output
    base_dir : Path
        Directory relative paths are resolved against
    """
    preset: Optional[str] = None
    lattice_parameter: float = 1.0
    input: Optional[Path] = None
    steps: List[Tuple[str, Any]] = field(default_factory=list)
    seed: Optional[int] = None
    output: Optional[Path] = None
    pretty: bool = False
    base_dir: Path = field(default_factory=Path.cwd)

    @classmethod
    def from_yaml(cls, path: Union[str, Path]) -> 'PipelineConfig':
        """Load a pipeline from a YAML file."""
        path = Path(path)
        try:
            with open(path, 'r', encoding='utf-8') as f:
                data = yaml.safe_load(f)
        except OSError as err:
            raise LatticeIOError(f"Could not read configuration '{path}'") from err
        except UnicodeDecodeError as err:
            raise ConfigError(f"Configuration '{path}' is not valid UTF-8 text") from err
        except yaml.YAMLError as err:
            raise ConfigError(f"Invalid YAML in '{path}'") from err

        logger.info(f"Loaded pipeline configuration {path}")
        return cls.from_dict(data, base_dir=path.resolve().parent)

    @classmethod
    def from_dict(cls, data: Dict, base_dir: Optional[Path] = None) -> 'PipelineConfig':
        """
        Build a pipeline from an already parsed mapping.

        Raises
        ------
        ConfigError
            On missing sections, unknown step types or bad parameters
        """
        if not isinstance(data, dict):
            raise ConfigError("Pipeline configuration must be a mapping")

        base_dir = Path(base_dir) if base_dir is not None else Path.cwd()

        lattice_section = data.get('lattice')
        if not isinstance(lattice_section, dict):
            raise ConfigError("Pipeline configuration needs a 'lattice' section")
        preset = lattice_section.get('preset')
        input_path = lattice_section.get('input')
        if (preset is None) == (input_path is None):
            raise ConfigError("The 'lattice' section needs exactly one of 'preset' or 'input'")
        if preset is not None and preset not in LATTICE_REGISTRY:
            available = ', '.join(LATTICE_REGISTRY)
            raise ConfigError(f"Unknown preset '{preset}'. Available presets: {available}")

        steps = []
        for raw in data.get('steps') or []:
            if not isinstance(raw, dict) or len(raw) != 1:
                raise ConfigError(f"Each step must be a single-key mapping, got {raw!r}")
            (name, params), = raw.items()
            if name not in STEP_TYPES:
                available = ', '.join(STEP_TYPES)
                raise ConfigError(f"Unknown step '{name}'. Available steps: {available}")
            steps.append((name, params))

        lattice_parameter = lattice_section.get('lattice_parameter', 1.0)
        if (isinstance(lattice_parameter, bool) or not isinstance(lattice_parameter, (int, float))
                or not math.isfinite(lattice_parameter) or lattice_parameter <= 0):
            raise ConfigError(
                f"'lattice_parameter' must be a positive number, got {lattice_parameter!r}"
            )

        seed = data.get('seed')
        if seed is not None and (isinstance(seed, bool) or not isinstance(seed, int) or seed < 0):
            raise ConfigError(f"'seed' must be a non-negative integer, got {seed!r}")

        output_section = data.get('output') or {}
        if not isinstance(output_section, dict):
            raise ConfigError("The 'output' section must be a mapping")
        output = output_section.get('path')

        config = cls(
            preset=preset,
            lattice_parameter=float(lattice_parameter),
            input=base_dir / input_path if input_path is not None else None,
            steps=steps,
            seed=seed,
            output=base_dir / output if output is not None else None,
            pretty=bool(output_section.get('pretty', False)),
            base_dir=base_dir,
        )
        # Parse every step up front so errors surface before any work is done
        for name, params in config.steps:
            config._parse_step(name, params)
        return config

    def _parse_step(self, name: str, params: Any) -> Dict:
        try:
            if name == 'expand':
                if isinstance(params, int):
                    if params < 1:
                        raise ValueError(f"expansion amount must be positive, got {params}")
                    return {'x': params, 'y': params, 'z': params}
                amounts = {axis: int(params.get(axis, 1)) for axis in ('x', 'y', 'z')}
                if any(amount < 1 for amount in amounts.values()):
                    raise ValueError(f"expansion amounts must be positive, got {amounts}")
                return amounts

            if name == 'drop':
                if params == 'all':
                    return {'axes': list(Axis)}
                if isinstance(params, str):
                    params = [params]
                return {'axes': [Axis.parse(axis) for axis in params]}

            if name == 'mask':
                ppu = float(params.get('ppu', 10.0))
                if not ppu > 0 or not math.isfinite(ppu):
                    raise ValueError(f"ppu must be a positive finite number, got {ppu}")
                return {
                    'image': self.base_dir / params['image'],
                    'ppu': ppu,
                    'axis': Axis.parse(params.get('axis', 'z')),
                }

            if name == 'alloy':
                targets = params['targets']
                if isinstance(targets, dict):
                    targets = list(targets.items())
                return {
                    'source': str(params['source']),
                    'alloy': Alloy.from_targets((str(k), int(r)) for k, r in targets),
                }
        except (KeyError, TypeError, AttributeError, ValueError) as err:
            raise ConfigError(f"Invalid parameters for step '{name}': {err}") from err
        raise ConfigError(f"Unknown step '{name}'")

    def initial_lattice(self) -> Lattice:
        if self.input is not None:
            return read_lattice(self.input)
        try:
            return create_lattice(self.preset, a=self.lattice_parameter)
        except ValueError as err:
            raise ConfigError(str(err)) from err

    def run(self, rng: Optional[np.random.Generator] = None) -> Lattice:
        """
        Build the starting lattice and apply every step.

        Parameters
        ----------
        rng : np.random.Generator, optional
            Random source for mask and alloy steps. Defaults to a generator
            seeded with ``seed``.
        """
        if rng is None:
            rng = np.random.default_rng(self.seed)

        lattice = self.initial_lattice()
        for name, raw in self.steps:
            params = self._parse_step(name, raw)
            logger.info(f"Pipeline step '{name}' on {lattice}")

            if name == 'expand':
                lattice = lattice.expand(params['x'], params['y'], params['z'])
            elif name == 'drop':
                for axis in params['axes']:
                    lattice = lattice.drop_along(axis)
            elif name == 'mask':
                mask = Mask.from_path(params['image'], params['ppu'])
                lattice = lattice.apply_mask(mask, params['axis'], rng)
            elif name == 'alloy':
                lattice = lattice.alloy_sites(params['source'], params['alloy'], rng)

        return lattice

    def write(self, lattice: Lattice) -> None:
        """Write ``lattice`` where the configuration says to."""
        write_lattice(lattice, self.output, pretty=self.pretty)
