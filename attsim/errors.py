"""Error taxonomy for attitude simulation.

- ConfigurationError: invalid model, orbit, elements, units or run settings.
  Raised at construction or first use, never recovered internally.
- NumericalConstraintWarning: quaternion norm drifted outside the accepted
  band when consumed. Advisory by default.
- NumericalConstraintError: the same condition when the run is configured
  to abort on it.
"""


class ConfigurationError(ValueError):
    """Invalid configuration of a model, orbit or simulation run."""


class NumericalConstraintWarning(UserWarning):
    """Quaternion norm outside the accepted band at consumption."""


class NumericalConstraintError(ArithmeticError):
    """Quaternion norm violation with an aborting norm policy."""
