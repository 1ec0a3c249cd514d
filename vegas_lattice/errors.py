"""
Exception hierarchy for vegas_lattice.

Every failure raised by the library derives from LatticeError, so callers
(and the command line) can catch a single type. The concrete classes also
derive from the closest builtin (ValueError / OSError) so that generic
handlers keep working.

Taxonomy
--------
InconsistentEdgesError : an edge references a site index that does not exist
NegativeSizeError      : a lattice size component is negative
InvalidRatiosError     : alloy kinds/ratios are mismatched or all zero
SerializationError     : a lattice document could not be parsed
LatticeIOError         : a file, stream or image could not be read
ConfigError            : a pipeline configuration file is malformed
"""


class LatticeError(Exception):
    """Base class for all errors raised by vegas_lattice."""


class InconsistentEdgesError(LatticeError, ValueError):
    """An edge points to a site index outside the lattice."""

    def __init__(self, message: str = "Edges reference sites that do not exist"):
        super().__init__(message)


class NegativeSizeError(LatticeError, ValueError):
    """A lattice was given a negative size along some axis."""

    def __init__(self, message: str = "Lattice size components must be non-negative"):
        super().__init__(message)


class InvalidRatiosError(LatticeError, ValueError):
    """Alloy kinds and ratios cannot describe a distribution."""


class SerializationError(LatticeError, ValueError):
    """A serialized lattice (or component) is malformed."""


class LatticeIOError(LatticeError, OSError):
    """Reading a lattice file, stream or mask image failed."""


class ImageReadError(LatticeIOError):
    """A mask image could not be decoded."""


class ConfigError(LatticeError, ValueError):
    """A pipeline configuration is missing keys or names unknown steps."""
