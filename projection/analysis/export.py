'''
Tabular export of projection results.

Flattens ProjectionResults into DataFrames for spreadsheet-style output:
one long table of every scenario-year, a per-scenario summary with target
price and upside, and the EPS reconciliation table.

Usage:
  from projection.analysis.export import projections_frame, summary_frame

  df = projections_frame(results)
  df.to_csv('nvda_projections.csv', index=False)
'''

from typing import Optional

import pandas as pd

from projection.domain.types import FinancialProjection
from projection.domain.types import ProjectionResults

PROJECTION_COLUMNS = [
    'year',
    'scenario',
    'revenue',
    'revenue_growth',
    'net_income',
    'net_income_growth',
    'net_income_margins',
    'eps',
    'analyst_eps_estimate',
    'valuation_method',
    'multiple_low',
    'multiple_high',
    'share_price_low',
    'share_price_high',
]

SUMMARY_COLUMNS = [
    'scenario',
    'final_year',
    'valuation_method',
    'target_price',
    'upside_percent',
    'revenue',
    'eps',
    'revenue_cagr',
    'share_price_cagr',
]

RECONCILIATION_COLUMNS = [
    'year',
    'scenario',
    'eps',
    'analyst_eps',
    'diff',
    'diff_percent',
    'status',
]


def _projection_row(scenario: str, p: FinancialProjection) -> dict:
  '''Convert FinancialProjection to flat dictionary for DataFrame row.'''
  if p.pe_low_est is not None:
    multiple_low, multiple_high = p.pe_low_est, p.pe_high_est
  else:
    multiple_low, multiple_high = p.ps_low_est, p.ps_high_est

  return {
      'year': p.year,
      'scenario': scenario,
      'revenue': p.revenue,
      'revenue_growth': p.revenue_growth,
      'net_income': p.net_income,
      'net_income_growth': p.net_income_growth,
      'net_income_margins': p.net_income_margins,
      'eps': p.eps,
      'analyst_eps_estimate': p.analyst_eps_estimate,
      'valuation_method': p.valuation_method.value,
      'multiple_low': multiple_low,
      'multiple_high': multiple_high,
      'share_price_low': p.share_price_low,
      'share_price_high': p.share_price_high,
  }


def projections_frame(results: ProjectionResults) -> pd.DataFrame:
  '''
  One row per (year, scenario), baseline first.

  Args:
    results: Projection results

  Returns:
    DataFrame with PROJECTION_COLUMNS; the baseline row has scenario
    'actual', followed by bear/base/bull for each projected year
  '''
  rows = [_projection_row('actual', results.baseline)]
  for yearly in results.projections:
    for name in ('bear', 'base', 'bull'):
      rows.append(_projection_row(name, getattr(yearly, name)))
  return pd.DataFrame(rows, columns=PROJECTION_COLUMNS)


def _upside(target: float, current_price: float) -> Optional[float]:
  if current_price <= 0:
    return None
  return (target - current_price) / current_price * 100.0


def summary_frame(results: ProjectionResults,
                  current_price: float) -> pd.DataFrame:
  '''
  Final-year outcome per scenario.

  Target price is the midpoint of the final year's price range; upside is
  measured against the current price.

  Args:
    results: Projection results
    current_price: Current market price per share

  Returns:
    DataFrame with SUMMARY_COLUMNS, one row per scenario (empty if there
    are no projected years)
  '''
  if not results.projections:
    return pd.DataFrame(columns=SUMMARY_COLUMNS)

  final = results.projections[-1]
  rows = []
  for name in ('bear', 'base', 'bull'):
    p: FinancialProjection = getattr(final, name)
    cagr = getattr(results.cagr, name)
    rows.append({
        'scenario': name,
        'final_year': p.year,
        'valuation_method': p.valuation_method.value,
        'target_price': p.share_price_mid,
        'upside_percent': _upside(p.share_price_mid, current_price),
        'revenue': p.revenue,
        'eps': p.eps,
        'revenue_cagr': cagr.revenue,
        'share_price_cagr': cagr.share_price,
    })
  return pd.DataFrame(rows, columns=SUMMARY_COLUMNS)


def reconciliation_frame(results: ProjectionResults) -> pd.DataFrame:
  '''Projected vs consensus EPS, one row per reconciled scenario-year.'''
  return pd.DataFrame(
      [{
          'year': r.year,
          'scenario': r.scenario,
          'eps': r.eps,
          'analyst_eps': r.analyst_eps,
          'diff': r.diff,
          'diff_percent': r.diff_percent,
          'status': r.status.value,
      } for r in results.reconciliation],
      columns=RECONCILIATION_COLUMNS,
  )
