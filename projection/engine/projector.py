"""
Pure scenario projection math.

This module compounds one scenario forward from the baseline year. No
pandas, no I/O: each year is derived only from the previous year of the
same scenario, so bear/base/bull are three independent calls of
project_scenario with different ScenarioParams.

Per projected year i:
  revenue_i  = revenue_{i-1} * (1 + g)
  margin_i   = margin_{i-1} + margin_change      (percentage points)
  ni_i       = revenue_i * margin_i
  shares_i   = shares_{i-1} * (1 + shares_growth)
  eps_i      = ni_i / shares_i
  price      = eps_i * P/E             if eps_i > 0
             = revenue_i/shares_i * P/S otherwise
"""

from dataclasses import dataclass
import itertools
import math
from typing import Optional

from projection.domain.types import AnalystEstimates
from projection.domain.types import FinancialProjection
from projection.domain.types import ScenarioParams
from projection.domain.types import ValuationMethod
from projection.engine.units import per_share
from projection.errors import ArithmeticGuardError
from projection.errors import InvalidAssumptionError


@dataclass(frozen=True)
class YearState:
  """
  Compounded state of a scenario at the end of one year.

  Attributes:
    offset: Years after the baseline (0 for the baseline itself)
    revenue: Revenue in billions
    margin: Net income margin in percent
    net_income: Net income in billions
    net_income_growth: Growth vs previous year in percent, None if the
      previous net income was zero
    shares: Shares outstanding in millions
  """
  offset: int
  revenue: float
  margin: float
  net_income: float
  net_income_growth: Optional[float]
  shares: float


def advance(state: YearState, params: ScenarioParams) -> YearState:
  """
  Compound a scenario by one year.

  Args:
    state: State at the end of the previous year
    params: Scenario parameters

  Returns:
    State at the end of the next year

  Raises:
    InvalidAssumptionError: If the share count drops to zero or below
    ArithmeticGuardError: If a compounded figure is no longer finite
  """
  revenue = state.revenue * (1.0 + params.revenue_growth / 100.0)
  margin = state.margin + params.margin_change
  net_income = revenue * margin / 100.0
  shares = state.shares * (1.0 + params.shares_growth / 100.0)

  if shares <= 0:
    raise InvalidAssumptionError(
        f'{params.name}: shares outstanding fell to {shares} in year '
        f'+{state.offset + 1}')

  if not all(math.isfinite(v) for v in (revenue, margin, net_income, shares)):
    raise ArithmeticGuardError(
        f'{params.name}: projection overflowed in year +{state.offset + 1}')

  if state.net_income == 0:
    net_income_growth = None
  else:
    net_income_growth = ((net_income - state.net_income) / state.net_income *
                         100.0)

  return YearState(
      offset=state.offset + 1,
      revenue=revenue,
      margin=margin,
      net_income=net_income,
      net_income_growth=net_income_growth,
      shares=shares,
  )


def value_year(
    state: YearState,
    year: int,
    params: ScenarioParams,
    analyst_eps: Optional[float] = None,
) -> FinancialProjection:
  """
  Derive EPS and the share price range for one compounded year.

  The method is chosen per year: P/E while EPS is positive, P/S on
  revenue per share otherwise.

  Args:
    state: Compounded state for the year
    year: Fiscal year
    params: Scenario parameters (multiples)
    analyst_eps: Consensus EPS for the year, if any

  Returns:
    FinancialProjection for the year

  Raises:
    ArithmeticGuardError: If a per-share figure or growth rate overflows
  """
  eps = per_share(state.net_income, state.shares)

  if eps > 0:
    method = ValuationMethod.PE
    low, high = eps * params.pe_low, eps * params.pe_high
  else:
    method = ValuationMethod.PS
    revenue_per_share = per_share(state.revenue, state.shares)
    low, high = (revenue_per_share * params.ps_low,
                 revenue_per_share * params.ps_high)

  growth = state.net_income_growth
  if not all(math.isfinite(v) for v in (eps, low, high)) or (
      growth is not None and not math.isfinite(growth)):
    raise ArithmeticGuardError(
        f'{params.name}: per-share figures overflowed in {year}')

  is_pe = method == ValuationMethod.PE
  return FinancialProjection(
      year=year,
      revenue=state.revenue,
      revenue_growth=params.revenue_growth,
      net_income=state.net_income,
      net_income_growth=growth,
      net_income_margins=state.margin,
      eps=eps,
      share_price_low=low,
      share_price_high=high,
      valuation_method=method,
      pe_low_est=params.pe_low if is_pe else None,
      pe_high_est=params.pe_high if is_pe else None,
      ps_low_est=None if is_pe else params.ps_low,
      ps_high_est=None if is_pe else params.ps_high,
      analyst_eps_estimate=analyst_eps,
  )


def project_scenario(
    baseline: FinancialProjection,
    params: ScenarioParams,
    shares_outstanding: float,
    analyst_estimates: Optional[AnalystEstimates] = None,
) -> tuple[FinancialProjection, ...]:
  """
  Project a single scenario forward from the baseline year.

  Args:
    baseline: Baseline year (actual data)
    params: Scenario parameters
    shares_outstanding: Current shares outstanding in millions
    analyst_estimates: Consensus estimates for annotating EPS (optional)

  Returns:
    Tuple of params.years projections for baseline.year+1 onwards; empty
    if params.years <= 0

  Raises:
    InvalidAssumptionError: If the share count is or becomes non-positive
    ArithmeticGuardError: If compounding overflows
  """
  if params.years <= 0:
    return ()

  if shares_outstanding <= 0:
    raise InvalidAssumptionError(
        f'shares_outstanding must be positive, got {shares_outstanding}')

  seed = YearState(
      offset=0,
      revenue=baseline.revenue,
      margin=baseline.net_income_margins,
      net_income=baseline.net_income,
      net_income_growth=baseline.net_income_growth,
      shares=shares_outstanding,
  )

  states = itertools.islice(
      itertools.accumulate(
          range(params.years),
          lambda state, _: advance(state, params),
          initial=seed,
      ),
      1,
      None,
  )

  projections = []
  for state in states:
    year = baseline.year + state.offset
    analyst_eps = (analyst_estimates.eps_for(year)
                   if analyst_estimates is not None else None)
    projections.append(value_year(state, year, params, analyst_eps))
  return tuple(projections)
