import pytest

from projection.errors import ArithmeticGuardError
from projection.errors import InsufficientDataError
from projection.errors import InvalidAssumptionError
from projection.errors import ProjectionError
from projection.errors import require_cagr


class TestErrors:
  """Tests for the projection error hierarchy."""

  def test_hierarchy(self):
    """All projection errors are ValueErrors."""
    for error in (InsufficientDataError, InvalidAssumptionError,
                  ArithmeticGuardError):
      assert issubclass(error, ProjectionError)
      assert issubclass(error, ValueError)

  def test_require_cagr_value(self):
    assert require_cagr(12.5) == 12.5

  def test_require_cagr_sentinel(self):
    with pytest.raises(ArithmeticGuardError, match='Share price CAGR'):
      require_cagr(None, label='Share price CAGR')
