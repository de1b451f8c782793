"""
Scenario registry mapping scenario names to parameter factories.

Each scenario is the same projection run with a different slice of the
assumptions: its own revenue growth and margin drift, with the valuation
multiples, share growth and horizon shared across scenarios.

To add a new scenario:
1. Add the growth / margin fields to ProjectionAssumptions
2. Add a factory here that picks them out
3. Register it in SCENARIOS

Example:
  SCENARIOS['stress'] = lambda a: _params('stress', a, a.stress_revenue_growth,
                                         a.stress_margin_change)
"""

from collections.abc import Callable

from projection.domain.types import ScenarioParams
from projection.scenarios.config import ProjectionAssumptions

SCENARIO_NAMES = ('bear', 'base', 'bull')


def _params(
    name: str,
    assumptions: ProjectionAssumptions,
    revenue_growth: float,
    margin_change: float,
) -> ScenarioParams:
  return ScenarioParams(
      name=name,
      revenue_growth=revenue_growth,
      margin_change=margin_change,
      pe_low=assumptions.pe_low,
      pe_high=assumptions.pe_high,
      ps_low=assumptions.ps_low,
      ps_high=assumptions.ps_high,
      shares_growth=assumptions.shares_growth,
      years=assumptions.years,
  )


SCENARIOS: dict[str, Callable[[ProjectionAssumptions], ScenarioParams]] = {
    'bear':
        lambda a: _params('bear', a, a.bear_revenue_growth,
                          a.bear_margin_change),
    'base':
        lambda a: _params('base', a, a.base_revenue_growth,
                          a.base_margin_change),
    'bull':
        lambda a: _params('bull', a, a.bull_revenue_growth,
                          a.bull_margin_change),
}


def create_scenario(name: str,
                    assumptions: ProjectionAssumptions) -> ScenarioParams:
  """
  Build the parameters of a single scenario.

  Args:
    name: Scenario name ('bear', 'base' or 'bull')
    assumptions: Projection assumptions

  Returns:
    ScenarioParams for the scenario

  Raises:
    KeyError: If the scenario name is not registered
  """
  try:
    factory = SCENARIOS[name]
  except KeyError as e:
    raise KeyError(f"Unknown scenario: '{name}'. "
                   f'Available: {list(SCENARIOS.keys())}') from e
  return factory(assumptions)


def create_scenarios(
    assumptions: ProjectionAssumptions) -> dict[str, ScenarioParams]:
  """
  Build parameters for bear, base and bull.

  Args:
    assumptions: Projection assumptions

  Returns:
    Dictionary keyed by scenario name, in bear/base/bull order
  """
  return {name: create_scenario(name, assumptions) for name in SCENARIO_NAMES}


def list_scenarios() -> list[str]:
  """List registered scenario names."""
  return list(SCENARIOS.keys())
