"""
Deterministic synthetic fundamentals.

Used when no real data source is configured or the real source fails.
Every symbol gets the same large-cap growth profile, so projections made
from mock data are reproducible.
"""

from projection.domain.types import AnalystEstimate
from projection.domain.types import AnalystEstimates
from projection.domain.types import CurrentMetrics
from projection.domain.types import FundamentalData
from projection.domain.types import HistoricalFinancial
from projection.providers.base import FundamentalsProvider

# (year, revenue $B, net income $B, eps)
_HISTORICAL = (
    (2021, 26.91, 9.75, 3.85),
    (2022, 26.97, 4.37, 0.17),
    (2023, 60.92, 29.76, 1.19),
    (2024, 130.50, 72.88, 2.94),
)

_REVENUE_ESTIMATES = ((2025, 170.8), (2026, 195.0))
_EPS_ESTIMATES = ((2025, 3.50), (2026, 4.25))


class MockFundamentalsProvider(FundamentalsProvider):
  """
  Fixed synthetic fundamentals for any symbol.

  Four historical years, two years of analyst estimates and a current
  market snapshot.
  """

  def __init__(
      self,
      price: float = 202.49,
      pe_ratio: float = 68.9,
      shares_outstanding: float = 24804.0,
  ):
    """
    Initialize mock provider.

    Args:
      price: Current price per share (default: 202.49)
      pe_ratio: Trailing P/E (default: 68.9)
      shares_outstanding: Shares in millions (default: 24804)
    """
    self.price = price
    self.pe_ratio = pe_ratio
    self.shares_outstanding = shares_outstanding

  def fetch(self, symbol: str) -> FundamentalData:
    """Return synthetic fundamentals labelled with the symbol."""
    return FundamentalData(
        symbol=symbol.upper(),
        historical=tuple(
            HistoricalFinancial(year=y, revenue=r, net_income=n, eps=e)
            for y, r, n, e in _HISTORICAL),
        current_metrics=CurrentMetrics(
            price=self.price,
            pe_ratio=self.pe_ratio,
            shares_outstanding=self.shares_outstanding,
            name=f'{symbol.upper()} (mock)',
        ),
        analyst_estimates=AnalystEstimates(
            revenue=tuple(
                AnalystEstimate(year=y, estimate=v)
                for y, v in _REVENUE_ESTIMATES),
            eps=tuple(
                AnalystEstimate(year=y, estimate=v)
                for y, v in _EPS_ESTIMATES),
        ),
    )
