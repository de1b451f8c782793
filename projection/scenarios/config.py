"""
Projection assumptions.

ProjectionAssumptions is a serializable (JSON-friendly) configuration class
holding the growth, margin and valuation inputs for the three scenarios.
The wire format uses camelCase keys; from_dict accepts either spelling.
"""

from dataclasses import asdict
from dataclasses import dataclass
from dataclasses import fields
import json
import math
from typing import Any

from projection.errors import InvalidAssumptionError


@dataclass(frozen=True)
class ProjectionAssumptions:
  """
  Growth and valuation assumptions for a projection run.

  Attributes:
    years: Number of years to project
    bear_revenue_growth: Bear annual revenue growth in percent
    base_revenue_growth: Base annual revenue growth in percent
    bull_revenue_growth: Bull annual revenue growth in percent
    bear_margin_change: Bear net margin drift in percentage points/year
    base_margin_change: Base net margin drift in percentage points/year
    bull_margin_change: Bull net margin drift in percentage points/year
    pe_low: Low P/E multiple (used when EPS > 0)
    pe_high: High P/E multiple (used when EPS > 0)
    ps_low: Low P/S multiple (used when EPS <= 0)
    ps_high: High P/S multiple (used when EPS <= 0)
    shares_growth: Annual change in share count in percent (negative for
      buybacks)
  """
  years: int = 5
  bear_revenue_growth: float = 20.0
  base_revenue_growth: float = 35.0
  bull_revenue_growth: float = 50.0
  bear_margin_change: float = -0.5
  base_margin_change: float = 0.5
  bull_margin_change: float = 1.0
  pe_low: float = 50.0
  pe_high: float = 60.0
  ps_low: float = 3.0
  ps_high: float = 8.0
  shares_growth: float = 0.0

  @classmethod
  def default(cls) -> 'ProjectionAssumptions':
    """
    Create default assumptions.

    Uses:
      - 5-year horizon
      - Revenue growth 20% / 35% / 50% (bear / base / bull)
      - Margin drift -0.5 / +0.5 / +1.0 points per year
      - P/E 50-60 for profitable years, P/S 3-8 otherwise
      - Flat share count
    """
    return cls()

  def validate(self) -> None:
    """
    Check that the assumptions can be projected.

    Raises:
      InvalidAssumptionError: If any field is outside its allowed domain
    """
    if isinstance(self.years, bool) or not isinstance(self.years, int):
      raise InvalidAssumptionError(
          f'years must be an integer, got {self.years!r}')
    if self.years < 0:
      raise InvalidAssumptionError(
          f'years must be non-negative, got {self.years}')

    for f in fields(self):
      if f.name == 'years':
        continue
      value = getattr(self, f.name)
      if not math.isfinite(value):
        raise InvalidAssumptionError(f'{f.name} must be finite, got {value}')

    if self.pe_low > self.pe_high:
      raise InvalidAssumptionError(
          f'pe_low ({self.pe_low}) must not exceed pe_high ({self.pe_high})')
    if self.ps_low > self.ps_high:
      raise InvalidAssumptionError(
          f'ps_low ({self.ps_low}) must not exceed ps_high ({self.ps_high})')
    if self.shares_growth <= -100.0:
      raise InvalidAssumptionError(
          f'shares_growth must be above -100%, got {self.shares_growth}')

  def to_dict(self) -> dict[str, Any]:
    """Convert to dictionary with snake_case keys."""
    return asdict(self)

  def to_wire_dict(self) -> dict[str, Any]:
    """Convert to dictionary with camelCase keys."""
    return {_to_camel(k): v for k, v in asdict(self).items()}

  def to_json(self) -> str:
    """Serialize to JSON string."""
    return json.dumps(self.to_dict(), indent=2)

  @classmethod
  def from_dict(cls, data: dict[str, Any]) -> 'ProjectionAssumptions':
    """
    Create from dictionary.

    Missing fields take their defaults.

    Raises:
      InvalidAssumptionError: If a key does not name an assumption, or
        years is not a whole number
    """
    known = {f.name for f in fields(cls)}
    kwargs: dict[str, Any] = {}
    for key, value in data.items():
      name = key if key in known else _to_snake(key)
      if name not in known:
        raise InvalidAssumptionError(f"Unknown assumption: '{key}'. "
                                     f'Available: {sorted(known)}')
      if name == 'years':
        years = float(value)
        if not years.is_integer():
          raise InvalidAssumptionError(
              f'years must be a whole number, got {value!r}')
        kwargs[name] = int(years)
      else:
        kwargs[name] = float(value)
    return cls(**kwargs)

  @classmethod
  def from_json(cls, json_str: str) -> 'ProjectionAssumptions':
    """Create from JSON string."""
    return cls.from_dict(json.loads(json_str))


def _to_camel(name: str) -> str:
  head, *rest = name.split('_')
  return head + ''.join(part.capitalize() for part in rest)


def _to_snake(name: str) -> str:
  return ''.join(f'_{c.lower()}' if c.isupper() else c for c in name)
