'''
Baseline year resolution.

The baseline is the most recent historical year with complete data. It is
the actual-data anchor from which every scenario is compounded, and is
reported alongside the projections in the same FinancialProjection shape.
'''

from collections.abc import Sequence
from typing import Optional

import pandas as pd

from projection.domain.types import CurrentMetrics
from projection.domain.types import FinancialProjection
from projection.domain.types import HistoricalFinancial
from projection.domain.types import ValuationMethod
from projection.engine.units import per_share
from projection.errors import InsufficientDataError

_REQUIRED = ['revenue', 'net_income', 'eps']


def complete_years(historical: Sequence[HistoricalFinancial]) -> pd.DataFrame:
  '''
  Historical entries with revenue, net income and eps all present.

  Args:
    historical: Yearly financials in any order

  Returns:
    DataFrame with columns year, revenue, net_income, eps sorted by year

  Raises:
    InsufficientDataError: If two entries share the same year
  '''
  frame = pd.DataFrame(
      [{
          'year': h.year,
          'revenue': h.revenue,
          'net_income': h.net_income,
          'eps': h.eps,
      } for h in historical],
      columns=['year'] + _REQUIRED,
  )

  duplicated = frame.loc[frame['year'].duplicated(), 'year']
  if not duplicated.empty:
    raise InsufficientDataError(
        f'Duplicate historical years: {sorted(set(duplicated.tolist()))}')

  frame[_REQUIRED] = frame[_REQUIRED].astype(float)
  frame = frame.replace([float('inf'), float('-inf')], float('nan'))
  return frame.dropna(subset=_REQUIRED).sort_values('year')


def _growth(current: float, previous: Optional[float]) -> Optional[float]:
  if previous is None or previous == 0:
    return None
  return (current - previous) / previous * 100.0


def resolve_baseline(
    historical: Sequence[HistoricalFinancial],
    current_metrics: CurrentMetrics,
) -> FinancialProjection:
  '''
  Select the baseline year and express it as a FinancialProjection.

  Growth figures are measured against the previous complete year, when
  there is one. The price range is the current market price; the
  valuation method only reflects the sign of the baseline EPS.

  Args:
    historical: Yearly financials in any order, possibly sparse
    current_metrics: Current market snapshot

  Returns:
    FinancialProjection for the baseline year

  Raises:
    InsufficientDataError: If there is no complete year, or the baseline
      revenue is zero
  '''
  if not historical:
    raise InsufficientDataError('No historical data available')

  complete = complete_years(historical)
  if complete.empty:
    raise InsufficientDataError(
        f'No complete historical year among {len(historical)} entries')

  latest = complete.iloc[-1]
  previous = complete.iloc[-2] if len(complete) > 1 else None

  year = int(latest['year'])
  revenue = float(latest['revenue'])
  net_income = float(latest['net_income'])
  eps = float(latest['eps'])

  if revenue == 0:
    raise InsufficientDataError(
        f'Baseline year {year} has zero revenue; margin is undefined')

  prev_revenue = float(previous['revenue']) if previous is not None else None
  prev_net_income = (float(previous['net_income'])
                     if previous is not None else None)

  price = current_metrics.price
  shares = current_metrics.shares_outstanding

  if eps > 0:
    method = ValuationMethod.PE
    pe_est: Optional[float] = current_metrics.pe_ratio
    ps_est: Optional[float] = None
  else:
    method = ValuationMethod.PS
    pe_est = None
    revenue_per_share = per_share(revenue, shares) if shares > 0 else 0.0
    ps_est = price / revenue_per_share if revenue_per_share > 0 else None

  return FinancialProjection(
      year=year,
      revenue=revenue,
      revenue_growth=_growth(revenue, prev_revenue),
      net_income=net_income,
      net_income_growth=_growth(net_income, prev_net_income),
      net_income_margins=net_income / revenue * 100.0,
      eps=eps,
      share_price_low=price,
      share_price_high=price,
      valuation_method=method,
      pe_low_est=pe_est,
      pe_high_est=pe_est,
      ps_low_est=ps_est,
      ps_high_est=ps_est,
  )
