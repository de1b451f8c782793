"""Projection assumptions and scenario registry."""

from projection.scenarios.config import ProjectionAssumptions
from projection.scenarios.registry import create_scenario
from projection.scenarios.registry import create_scenarios
from projection.scenarios.registry import list_scenarios
from projection.scenarios.registry import SCENARIO_NAMES
from projection.scenarios.registry import SCENARIOS

__all__ = [
  'ProjectionAssumptions',
  'SCENARIOS',
  'SCENARIO_NAMES',
  'create_scenario',
  'create_scenarios',
  'list_scenarios',
]
