'''
Projected EPS versus analyst consensus.

Reconciliation is an annotation: it reads the projected and consensus EPS
of each scenario-year and classifies the gap, without touching the
projections themselves.
'''

from collections.abc import Sequence
from typing import Optional

from projection.domain.types import ConsensusStatus
from projection.domain.types import EpsReconciliation
from projection.domain.types import FinancialProjection
from projection.domain.types import YearlyProjection

DEFAULT_THRESHOLD = 5.0


def classify_eps(
    eps: float,
    analyst_eps: float,
    threshold: float = DEFAULT_THRESHOLD,
) -> tuple[float, Optional[float], ConsensusStatus]:
  '''
  Compare a projected EPS to the consensus.

  Args:
    eps: Projected EPS
    analyst_eps: Consensus EPS
    threshold: Percent band around consensus treated as aligned

  Returns:
    Tuple of (diff, diff_percent, status). diff_percent is None when the
    consensus is zero; status then follows the sign of diff.
  '''
  diff = eps - analyst_eps
  diff_percent = (diff / abs(analyst_eps) * 100.0
                  if analyst_eps != 0 else None)

  if diff_percent is not None and abs(diff_percent) < threshold:
    status = ConsensusStatus.ALIGNED
  elif diff > 0:
    status = ConsensusStatus.ABOVE
  elif diff < 0:
    status = ConsensusStatus.BELOW
  else:
    status = ConsensusStatus.ALIGNED

  return diff, diff_percent, status


def reconcile_scenario(
    scenario: str,
    projections: Sequence[FinancialProjection],
    threshold: float = DEFAULT_THRESHOLD,
) -> tuple[EpsReconciliation, ...]:
  '''
  Reconcile one scenario's years that carry a consensus EPS.

  Args:
    scenario: Scenario name
    projections: Scenario projections in year order
    threshold: Percent band around consensus treated as aligned

  Returns:
    One EpsReconciliation per year with a consensus estimate
  '''
  rows = []
  for projection in projections:
    if projection.analyst_eps_estimate is None:
      continue
    diff, diff_percent, status = classify_eps(
        projection.eps, projection.analyst_eps_estimate, threshold)
    rows.append(
        EpsReconciliation(
            year=projection.year,
            scenario=scenario,
            eps=projection.eps,
            analyst_eps=projection.analyst_eps_estimate,
            diff=diff,
            diff_percent=diff_percent,
            status=status,
        ))
  return tuple(rows)


def reconcile_eps(
    projections: Sequence[YearlyProjection],
    threshold: float = DEFAULT_THRESHOLD,
) -> tuple[EpsReconciliation, ...]:
  '''
  Reconcile all scenarios, ordered by year then bear/base/bull.

  Args:
    projections: Yearly projections
    threshold: Percent band around consensus treated as aligned

  Returns:
    Tuple of EpsReconciliation (empty without consensus data)
  '''
  rows = []
  for yearly in projections:
    for name in ('bear', 'base', 'bull'):
      rows.extend(
          reconcile_scenario(name, (getattr(yearly, name),), threshold))
  return tuple(rows)
