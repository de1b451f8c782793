'''
Domain types for the projection engine.

These frozen dataclasses are the contracts between the fundamentals
provider, the engine and the presentation/export side. Inputs arrive in
the camelCase wire form (see from_dict) and results leave as primitives
(see to_dict).

Units: revenue and net income are in billions, shares in millions,
growth rates and margins in percent.
'''

from dataclasses import dataclass, field
import enum
import math
from typing import Any, Dict, Optional, Tuple

import pandas as pd


class ValuationMethod(str, enum.Enum):
  '''Multiple applied to derive the share price range.'''
  PE = 'PE'
  PS = 'PS'


class ConsensusStatus(str, enum.Enum):
  '''Projected EPS relative to analyst consensus.'''
  ALIGNED = 'Aligned'
  ABOVE = 'Above consensus'
  BELOW = 'Below consensus'


def _optional_float(value: Any) -> Optional[float]:
  if value is None:
    return None
  value = float(value)
  if math.isnan(value):
    return None
  return value


@dataclass(frozen=True)
class HistoricalFinancial:
  '''
  One fiscal year of reported financials.

  Any metric may be missing for sparse years; the baseline resolver only
  uses entries where all three are present.

  Attributes:
    year: Fiscal year
    revenue: Revenue in billions
    net_income: Net income in billions
    eps: Earnings per share in dollars
  '''
  year: int
  revenue: Optional[float] = None
  net_income: Optional[float] = None
  eps: Optional[float] = None

  @property
  def is_complete(self) -> bool:
    '''True if revenue, net income and eps are all present and finite.'''
    values = (self.revenue, self.net_income, self.eps)
    return all(v is not None and math.isfinite(v) for v in values)

  @classmethod
  def from_dict(cls, data: Dict[str, Any]) -> 'HistoricalFinancial':
    return cls(
        year=int(data['year']),
        revenue=_optional_float(data.get('revenue')),
        net_income=_optional_float(data.get('netIncome',
                                            data.get('net_income'))),
        eps=_optional_float(data.get('eps')),
    )


@dataclass(frozen=True)
class CurrentMetrics:
  '''
  Current market snapshot for a security.

  Attributes:
    price: Last market price per share
    pe_ratio: Trailing P/E ratio
    shares_outstanding: Shares outstanding in millions
    name: Company name (optional)
    exchange: Listing exchange (optional)
    market_cap: Display-formatted market cap (optional)
    dividend_yield: Dividend yield in percent (optional)
  '''
  price: float
  pe_ratio: float
  shares_outstanding: float
  name: Optional[str] = None
  exchange: Optional[str] = None
  market_cap: Optional[str] = None
  dividend_yield: Optional[float] = None

  @classmethod
  def from_dict(cls, data: Dict[str, Any]) -> 'CurrentMetrics':
    shares = data.get('sharesOutstanding', data.get('shares_outstanding'))
    if shares is None:
      raise KeyError('sharesOutstanding')
    return cls(
        price=float(data['price']),
        pe_ratio=float(data.get('peRatio', data.get('pe_ratio', 0.0))),
        shares_outstanding=float(shares),
        name=data.get('name'),
        exchange=data.get('exchange'),
        market_cap=data.get('marketCap', data.get('market_cap')),
        dividend_yield=_optional_float(
            data.get('dividendYield', data.get('dividend_yield'))),
    )


@dataclass(frozen=True)
class AnalystEstimate:
  year: int
  estimate: float


@dataclass(frozen=True)
class AnalystEstimates:
  '''
  Analyst consensus estimates by fiscal year.

  Attributes:
    revenue: Revenue estimates in billions
    eps: EPS estimates in dollars
  '''
  revenue: Tuple[AnalystEstimate, ...] = ()
  eps: Tuple[AnalystEstimate, ...] = ()

  def eps_for(self, year: int) -> Optional[float]:
    '''Consensus EPS for a year, or None if not covered.'''
    return _lookup(self.eps, year)

  def revenue_for(self, year: int) -> Optional[float]:
    '''Consensus revenue for a year, or None if not covered.'''
    return _lookup(self.revenue, year)

  @classmethod
  def from_dict(cls, data: Dict[str, Any]) -> 'AnalystEstimates':
    return cls(
        revenue=tuple(
            AnalystEstimate(int(e['year']), float(e['estimate']))
            for e in data.get('revenue', [])),
        eps=tuple(
            AnalystEstimate(int(e['year']), float(e['estimate']))
            for e in data.get('eps', [])),
    )


def _lookup(estimates: Tuple[AnalystEstimate, ...],
            year: int) -> Optional[float]:
  for estimate in estimates:
    if estimate.year == year:
      return estimate.estimate
  return None


@dataclass(frozen=True)
class FundamentalData:
  '''
  Complete fundamentals for a security, as handed over by a provider.

  Attributes:
    symbol: Ticker symbol
    historical: Yearly financials, in any order
    current_metrics: Current market snapshot
    analyst_estimates: Analyst consensus (optional)
  '''
  symbol: str
  historical: Tuple[HistoricalFinancial, ...]
  current_metrics: CurrentMetrics
  analyst_estimates: Optional[AnalystEstimates] = None

  @classmethod
  def from_dict(cls, data: Dict[str, Any]) -> 'FundamentalData':
    '''
    Construct from the camelCase wire format.

    Args:
      data: Parsed JSON payload with symbol, historical, currentMetrics
        and optional analystEstimates

    Returns:
      FundamentalData

    Raises:
      ValueError: If a required section is missing or a field is null
    '''
    try:
      metrics = data.get('currentMetrics', data.get('current_metrics'))
      if metrics is None:
        raise KeyError('currentMetrics')
      estimates = data.get('analystEstimates', data.get('analyst_estimates'))
      return cls(
          symbol=str(data['symbol']),
          historical=tuple(
              HistoricalFinancial.from_dict(h)
              for h in data.get('historical', [])),
          current_metrics=CurrentMetrics.from_dict(metrics),
          analyst_estimates=(AnalystEstimates.from_dict(estimates)
                             if estimates is not None else None),
      )
    except KeyError as e:
      raise ValueError(f'Missing required field in fundamentals: {e}') from e
    except TypeError as e:
      raise ValueError(f'Invalid field in fundamentals: {e}') from e

  def historical_frame(self) -> pd.DataFrame:
    '''Historical financials as a DataFrame with one row per entry.'''
    return pd.DataFrame(
        [{
            'year': h.year,
            'revenue': h.revenue,
            'net_income': h.net_income,
            'eps': h.eps,
        } for h in self.historical],
        columns=['year', 'revenue', 'net_income', 'eps'],
    )


@dataclass(frozen=True)
class ScenarioParams:
  '''
  Fully prepared inputs for projecting one scenario.

  Built from ProjectionAssumptions by the scenario registry; the projector
  only sees these plain numbers.

  Attributes:
    name: Scenario name
    revenue_growth: Constant annual revenue growth in percent
    margin_change: Net margin drift in percentage points per year
    pe_low: Low P/E multiple
    pe_high: High P/E multiple
    ps_low: Low P/S multiple
    ps_high: High P/S multiple
    shares_growth: Annual change in share count in percent
    years: Number of projected years
  '''
  name: str
  revenue_growth: float
  margin_change: float
  pe_low: float
  pe_high: float
  ps_low: float
  ps_high: float
  shares_growth: float
  years: int


@dataclass(frozen=True)
class FinancialProjection:
  '''
  Financials for one year of one scenario (or the actual baseline year).

  Exactly one pair of multiple estimates is set: pe_low_est/pe_high_est
  for P/E valuation, ps_low_est/ps_high_est for P/S valuation.

  Attributes:
    year: Fiscal year
    revenue: Revenue in billions
    revenue_growth: Revenue growth in percent (None if not computable)
    net_income: Net income in billions
    net_income_growth: Net income growth in percent (None if prior was 0)
    net_income_margins: Net income margin in percent
    eps: Earnings per share in dollars
    share_price_low: Low end of the share price range
    share_price_high: High end of the share price range
    valuation_method: Multiple used for the price range
    pe_low_est: Low P/E multiple (P/E valuation only)
    pe_high_est: High P/E multiple (P/E valuation only)
    ps_low_est: Low P/S multiple (P/S valuation only)
    ps_high_est: High P/S multiple (P/S valuation only)
    analyst_eps_estimate: Consensus EPS for the year (optional)
  '''
  year: int
  revenue: float
  revenue_growth: Optional[float]
  net_income: float
  net_income_growth: Optional[float]
  net_income_margins: float
  eps: float
  share_price_low: float
  share_price_high: float
  valuation_method: ValuationMethod
  pe_low_est: Optional[float] = None
  pe_high_est: Optional[float] = None
  ps_low_est: Optional[float] = None
  ps_high_est: Optional[float] = None
  analyst_eps_estimate: Optional[float] = None

  @property
  def share_price_mid(self) -> float:
    '''Midpoint of the share price range.'''
    return (self.share_price_low + self.share_price_high) / 2.0

  def to_dict(self) -> Dict[str, Any]:
    '''Convert to camelCase primitives, omitting unset optional multiples.'''
    result: Dict[str, Any] = {
        'year': self.year,
        'revenue': self.revenue,
        'revenueGrowth': self.revenue_growth,
        'netIncome': self.net_income,
        'netIncomeGrowth': self.net_income_growth,
        'netIncomeMargins': self.net_income_margins,
        'eps': self.eps,
        'sharePriceLow': self.share_price_low,
        'sharePriceHigh': self.share_price_high,
        'valuationMethod': self.valuation_method.value,
    }
    optional = {
        'peLowEst': self.pe_low_est,
        'peHighEst': self.pe_high_est,
        'psLowEst': self.ps_low_est,
        'psHighEst': self.ps_high_est,
        'analystEpsEstimate': self.analyst_eps_estimate,
    }
    result.update({k: v for k, v in optional.items() if v is not None})
    return result


@dataclass(frozen=True)
class YearlyProjection:
  '''Bear/base/bull projections for one year, side by side.'''
  year: int
  bear: FinancialProjection
  base: FinancialProjection
  bull: FinancialProjection

  def to_dict(self) -> Dict[str, Any]:
    return {
        'year': self.year,
        'bear': self.bear.to_dict(),
        'base': self.base.to_dict(),
        'bull': self.bull.to_dict(),
    }


@dataclass(frozen=True)
class CagrMetrics:
  '''
  Compound annual growth rates over the projection horizon.

  Attributes:
    revenue: Revenue CAGR in percent (None if undefined)
    share_price: Share price CAGR in percent (None if undefined)
  '''
  revenue: Optional[float]
  share_price: Optional[float]

  def to_dict(self) -> Dict[str, Any]:
    return {'revenue': self.revenue, 'sharePrice': self.share_price}


@dataclass(frozen=True)
class ScenarioCagr:
  bear: CagrMetrics
  base: CagrMetrics
  bull: CagrMetrics

  def to_dict(self) -> Dict[str, Any]:
    return {
        'bear': self.bear.to_dict(),
        'base': self.base.to_dict(),
        'bull': self.bull.to_dict(),
    }


@dataclass(frozen=True)
class EpsReconciliation:
  '''
  Projected EPS compared against analyst consensus for one scenario-year.

  Attributes:
    year: Fiscal year
    scenario: Scenario name ('bear', 'base' or 'bull')
    eps: Projected EPS
    analyst_eps: Consensus EPS
    diff: eps - analyst_eps
    diff_percent: diff relative to |analyst_eps| in percent (None if
      analyst_eps is zero)
    status: Classification against the consensus threshold
  '''
  year: int
  scenario: str
  eps: float
  analyst_eps: float
  diff: float
  diff_percent: Optional[float]
  status: ConsensusStatus

  def to_dict(self) -> Dict[str, Any]:
    return {
        'year': self.year,
        'scenario': self.scenario,
        'eps': self.eps,
        'analystEps': self.analyst_eps,
        'diff': self.diff,
        'diffPercent': self.diff_percent,
        'status': self.status.value,
    }


@dataclass(frozen=True)
class ProjectionResults:
  '''
  Complete projection output: actual baseline plus forward scenarios.

  Attributes:
    baseline: Most recent complete historical year (actual data)
    projections: Forward years with bear/base/bull side by side
    cagr: CAGR per scenario over the full horizon
    reconciliation: Projected vs consensus EPS, where consensus exists
  '''
  baseline: FinancialProjection
  projections: Tuple[YearlyProjection, ...]
  cagr: ScenarioCagr
  reconciliation: Tuple[EpsReconciliation, ...] = field(default=())

  def scenario(self, name: str) -> Tuple[FinancialProjection, ...]:
    '''
    Projections of a single scenario in year order.

    Args:
      name: 'bear', 'base' or 'bull'

    Raises:
      KeyError: If the scenario name is unknown
    '''
    if name not in ('bear', 'base', 'bull'):
      raise KeyError(f"Unknown scenario: '{name}'")
    return tuple(getattr(p, name) for p in self.projections)

  def to_dict(self) -> Dict[str, Any]:
    '''Convert to a JSON-friendly dictionary.'''
    return {
        'baseline': self.baseline.to_dict(),
        'projections': [p.to_dict() for p in self.projections],
        'cagr': self.cagr.to_dict(),
        'reconciliation': [r.to_dict() for r in self.reconciliation],
    }
