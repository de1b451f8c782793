"""Exceptions raised by the projection engine."""

from typing import Optional


class ProjectionError(ValueError):
  """Base class for all projection errors."""


class InsufficientDataError(ProjectionError):
  """No usable baseline year could be resolved from the historical data."""


class InvalidAssumptionError(ProjectionError):
  """Assumptions or current metrics are outside the allowed domain."""


class ArithmeticGuardError(ProjectionError):
  """A guarded computation (e.g. CAGR of a non-positive value) is undefined."""


def require_cagr(value: Optional[float], label: str = 'CAGR') -> float:
  '''
  Unwrap a CAGR sentinel, raising instead of returning None.

  The engine reports undefined CAGRs as None. Callers that cannot handle
  a missing value use this to turn the sentinel into an error.

  Args:
    value: CAGR percentage or None
    label: Name used in the error message

  Returns:
    The CAGR percentage

  Raises:
    ArithmeticGuardError: If value is None
  '''
  if value is None:
    raise ArithmeticGuardError(
        f'{label} is undefined for non-positive start or end values')
  return value
