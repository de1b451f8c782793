'''Projection engine with pure math functions.'''

from projection.engine.baseline import resolve_baseline
from projection.engine.cagr import compute_cagr
from projection.engine.cagr import compute_scenario_cagr
from projection.engine.cagr import scenario_cagr_metrics
from projection.engine.projector import project_scenario
from projection.engine.reconcile import classify_eps
from projection.engine.reconcile import reconcile_eps

__all__ = [
    'classify_eps',
    'compute_cagr',
    'compute_scenario_cagr',
    'project_scenario',
    'reconcile_eps',
    'resolve_baseline',
    'scenario_cagr_metrics',
]
