'''
Compound annual growth rate summaries.

CAGR = (end / start) ** (1 / years) - 1 is only defined for positive start
and end values. For anything else this module returns None rather than a
NaN or complex number, and callers decide how to present the gap.
'''

from collections.abc import Sequence
from math import isfinite
from typing import Optional

from projection.domain.types import CagrMetrics
from projection.domain.types import FinancialProjection
from projection.domain.types import ScenarioCagr


def compute_cagr(start: float, end: float, years: int) -> Optional[float]:
  '''
  Compound annual growth rate in percent.

  Args:
    start: Value at the beginning of the period
    end: Value at the end of the period
    years: Number of compounding periods

  Returns:
    CAGR in percent, or None if start or end is non-positive, either is
    non-finite, years is not positive, or end / start overflows
  '''
  if years <= 0:
    return None
  if not isfinite(start) or not isfinite(end):
    return None
  if start <= 0 or end <= 0:
    return None
  ratio = end / start
  if not isfinite(ratio):
    return None
  return (ratio**(1.0 / years) - 1.0) * 100.0


def scenario_cagr_metrics(
    baseline: FinancialProjection,
    current_price: float,
    projections: Sequence[FinancialProjection],
) -> CagrMetrics:
  '''
  Revenue and share price CAGR over one scenario's full horizon.

  Revenue compounds from the baseline revenue to the final year's revenue.
  Share price compounds from the current market price to the midpoint of
  the final year's price range.

  Args:
    baseline: Baseline year
    current_price: Current market price per share
    projections: Scenario projections in year order

  Returns:
    CagrMetrics with None for undefined values
  '''
  if not projections:
    return CagrMetrics(revenue=None, share_price=None)

  final = projections[-1]
  years = len(projections)
  return CagrMetrics(
      revenue=compute_cagr(baseline.revenue, final.revenue, years),
      share_price=compute_cagr(current_price, final.share_price_mid, years),
  )


def compute_scenario_cagr(
    baseline: FinancialProjection,
    current_price: float,
    bear: Sequence[FinancialProjection],
    base: Sequence[FinancialProjection],
    bull: Sequence[FinancialProjection],
) -> ScenarioCagr:
  '''CAGR metrics for all three scenarios.'''
  return ScenarioCagr(
      bear=scenario_cagr_metrics(baseline, current_price, bear),
      base=scenario_cagr_metrics(baseline, current_price, base),
      bull=scenario_cagr_metrics(baseline, current_price, bull),
  )
