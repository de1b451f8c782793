import pytest

from projection.domain.types import AnalystEstimate
from projection.domain.types import AnalystEstimates
from projection.domain.types import CurrentMetrics
from projection.domain.types import FinancialProjection
from projection.domain.types import FundamentalData
from projection.domain.types import HistoricalFinancial
from projection.domain.types import ScenarioParams
from projection.domain.types import ValuationMethod


def make_baseline(
    year: int = 2024,
    revenue: float = 100.0,
    net_income: float = 20.0,
    eps: float = 2.0,
) -> FinancialProjection:
  """Baseline FinancialProjection with margin derived from the inputs."""
  return FinancialProjection(
      year=year,
      revenue=revenue,
      revenue_growth=None,
      net_income=net_income,
      net_income_growth=None,
      net_income_margins=net_income / revenue * 100.0,
      eps=eps,
      share_price_low=100.0,
      share_price_high=100.0,
      valuation_method=ValuationMethod.PE if eps > 0 else ValuationMethod.PS,
  )


def make_params(
    revenue_growth: float = 50.0,
    margin_change: float = 1.0,
    years: int = 3,
    shares_growth: float = 0.0,
    name: str = 'bull',
) -> ScenarioParams:
  """ScenarioParams with the default multiples."""
  return ScenarioParams(
      name=name,
      revenue_growth=revenue_growth,
      margin_change=margin_change,
      pe_low=50.0,
      pe_high=60.0,
      ps_low=3.0,
      ps_high=8.0,
      shares_growth=shares_growth,
      years=years,
  )


@pytest.fixture
def sample_fundamentals() -> FundamentalData:
  """Profitable company: revenue 100B, net income 20B, 1000M shares."""
  return FundamentalData(
      symbol='TEST',
      historical=(
          HistoricalFinancial(year=2022, revenue=64.0, net_income=10.0,
                              eps=1.0),
          HistoricalFinancial(year=2023, revenue=80.0, net_income=16.0,
                              eps=1.6),
          HistoricalFinancial(year=2024, revenue=100.0, net_income=20.0,
                              eps=2.0),
      ),
      current_metrics=CurrentMetrics(
          price=100.0,
          pe_ratio=50.0,
          shares_outstanding=1000.0,
      ),
      analyst_estimates=AnalystEstimates(
          revenue=(AnalystEstimate(year=2025, estimate=130.0),),
          eps=(
              AnalystEstimate(year=2025, estimate=25.0),
              AnalystEstimate(year=2026, estimate=40.0),
          ),
      ),
  )


@pytest.fixture
def unprofitable_fundamentals() -> FundamentalData:
  """Loss-making company: revenue 100B, net loss 1B, 1000M shares."""
  return FundamentalData(
      symbol='LOSS',
      historical=(
          HistoricalFinancial(year=2023, revenue=80.0, net_income=-2.0,
                              eps=-2.0),
          HistoricalFinancial(year=2024, revenue=100.0, net_income=-1.0,
                              eps=-1.0),
      ),
      current_metrics=CurrentMetrics(
          price=50.0,
          pe_ratio=0.0,
          shares_outstanding=1000.0,
      ),
  )
