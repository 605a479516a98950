"""Exception types raised by the generator.

Startup problems, malformed specs and bad user selections abort the run.
AnchorNotFound is raised by the text patcher and handled per file.
"""


class GeneratorError(Exception):
    """Base class for all generator errors."""


class ConfigError(GeneratorError):
    """Missing spec file, missing project manifest or unusable configuration."""


class SpecError(GeneratorError):
    """The OpenAPI document cannot be turned into endpoint descriptors."""


class SelectionError(GeneratorError):
    """Invalid feature name, layer choice or endpoint selection."""


class AnchorNotFound(GeneratorError):
    """The patcher could not locate an insertion point in an existing file."""
