"""
Exception hierarchy for PyReproj.

Errors are raised where they are detected and never retried:
- ConfigurationError at construction time (bad parameters, invalid ellipsoid,
  conflicting axes)
- UnsupportedConversionError when a transformation or projection is requested
  that cannot be resolved
- NumericDomainError during a transform call (singularities, non-convergence)
- RegistrationConflictError when a projection name is already taken
"""


class PyReprojError(Exception):
    """Base class for all PyReproj errors."""


class ConfigurationError(PyReprojError, ValueError):
    """A constructor parameter is missing or outside its valid range."""


class UnsupportedConversionError(PyReprojError, NotImplementedError):
    """No transformation path or projection implementation is available."""


class NumericDomainError(PyReprojError, ArithmeticError):
    """A coordinate lies on a singularity or an inverse failed to converge."""


class RegistrationConflictError(PyReprojError, ValueError):
    """A different implementation is already registered under a name."""


__all__ = [
    "PyReprojError",
    "ConfigurationError",
    "UnsupportedConversionError",
    "NumericDomainError",
    "RegistrationConflictError",
]
