import dataclasses
import json

import pytest

from projection.domain.types import ConsensusStatus
from projection.domain.types import CurrentMetrics
from projection.domain.types import ValuationMethod
from projection.errors import InsufficientDataError
from projection.errors import InvalidAssumptionError
from projection.providers.mock import MockFundamentalsProvider
from projection.run import run_projection
from projection.scenarios.config import ProjectionAssumptions


class TestRunProjection:
  """Tests for run_projection pipeline."""

  def test_structure(self, sample_fundamentals):
    """Default run: five years, three scenarios each."""
    results = run_projection(sample_fundamentals)

    assert results.baseline.year == 2024
    assert len(results.projections) == 5
    assert [p.year for p in results.projections] == list(range(2025, 2030))
    for yearly in results.projections:
      assert yearly.bear.year == yearly.year
      assert yearly.base.year == yearly.year
      assert yearly.bull.year == yearly.year

  def test_bull_matches_example(self, sample_fundamentals):
    """Bull defaults reproduce the worked example."""
    results = run_projection(sample_fundamentals,
                             ProjectionAssumptions(years=3))

    bull = results.scenario('bull')
    assert bull[0].revenue == pytest.approx(150.0)
    assert bull[0].eps == pytest.approx(31.5)
    assert bull[0].share_price_low == pytest.approx(1575.0)
    assert bull[0].share_price_high == pytest.approx(1890.0)
    assert bull[2].revenue == pytest.approx(337.5)
    assert bull[2].net_income == pytest.approx(77.625)

  def test_scenarios_use_own_assumptions(self, sample_fundamentals):
    """Bear/base/bull grow at their own rates."""
    results = run_projection(sample_fundamentals,
                             ProjectionAssumptions(years=1))

    first = results.projections[0]
    assert first.bear.revenue == pytest.approx(120.0)
    assert first.base.revenue == pytest.approx(135.0)
    assert first.bull.revenue == pytest.approx(150.0)
    assert first.bear.net_income_margins == pytest.approx(19.5)
    assert first.base.net_income_margins == pytest.approx(20.5)
    assert first.bull.net_income_margins == pytest.approx(21.0)

  def test_cagr(self, sample_fundamentals):
    results = run_projection(sample_fundamentals,
                             ProjectionAssumptions(years=3))

    assert results.cagr.bear.revenue == pytest.approx(20.0)
    assert results.cagr.base.revenue == pytest.approx(35.0)
    assert results.cagr.bull.revenue == pytest.approx(50.0)
    assert results.cagr.bull.share_price > results.cagr.bear.share_price

  def test_reconciliation_threshold(self, sample_fundamentals):
    """Bull 2025 EPS 31.5 vs consensus 25 is 26% above."""
    results = run_projection(sample_fundamentals,
                             ProjectionAssumptions(years=2))
    wide = run_projection(sample_fundamentals,
                          ProjectionAssumptions(years=2),
                          consensus_threshold=30.0)

    bull_2025 = [
        r for r in results.reconciliation
        if r.year == 2025 and r.scenario == 'bull'
    ][0]
    wide_2025 = [
        r for r in wide.reconciliation
        if r.year == 2025 and r.scenario == 'bull'
    ][0]

    assert bull_2025.diff_percent == pytest.approx(26.0)
    assert bull_2025.status == ConsensusStatus.ABOVE
    assert wide_2025.status == ConsensusStatus.ALIGNED
    assert results.scenario('bull')[0].eps == wide.scenario('bull')[0].eps

  def test_zero_years(self, sample_fundamentals):
    """Empty horizon: no projections, undefined CAGR."""
    results = run_projection(sample_fundamentals,
                             ProjectionAssumptions(years=0))

    assert results.projections == ()
    assert results.cagr.base.revenue is None
    assert results.cagr.base.share_price is None
    assert results.reconciliation == ()

  def test_unprofitable(self, unprofitable_fundamentals):
    """Loss-making baseline: P/S until margin turns positive."""
    assumptions = ProjectionAssumptions(years=3, bear_margin_change=-0.5,
                                        base_margin_change=0.5,
                                        bull_margin_change=1.0)

    results = run_projection(unprofitable_fundamentals, assumptions)

    assert results.baseline.valuation_method == ValuationMethod.PS
    bear = results.scenario('bear')
    assert all(p.valuation_method == ValuationMethod.PS for p in bear)
    bull = results.scenario('bull')
    assert bull[0].valuation_method == ValuationMethod.PS
    assert bull[1].valuation_method == ValuationMethod.PE

  def test_idempotent(self, sample_fundamentals):
    """Identical inputs yield identical results."""
    first = run_projection(sample_fundamentals)
    second = run_projection(sample_fundamentals)

    assert first == second
    assert json.dumps(first.to_dict()) == json.dumps(second.to_dict())

  def test_serializable(self, unprofitable_fundamentals):
    """Output contains no NaN or Infinity."""
    results = run_projection(unprofitable_fundamentals)

    json.dumps(results.to_dict(), allow_nan=False)

  def test_mock_fundamentals(self):
    """End-to-end run on the mock provider's data."""
    data = MockFundamentalsProvider().fetch('NVDA')

    results = run_projection(data)

    assert results.baseline.year == 2024
    assert results.baseline.revenue_growth == pytest.approx(
        (130.50 - 60.92) / 60.92 * 100)
    statuses = {(r.year, r.scenario): r.status for r in results.reconciliation}
    assert statuses[(2025, 'bear')] == ConsensusStatus.ALIGNED
    assert statuses[(2025, 'base')] == ConsensusStatus.ABOVE
    assert statuses[(2025, 'bull')] == ConsensusStatus.ABOVE
    assert len(results.reconciliation) == 6

  def test_invalid_assumptions_before_computation(self, sample_fundamentals):
    with pytest.raises(InvalidAssumptionError, match='pe_low'):
      run_projection(sample_fundamentals,
                     ProjectionAssumptions(pe_low=70.0, pe_high=60.0))

  def test_negative_years(self, sample_fundamentals):
    with pytest.raises(InvalidAssumptionError, match='years'):
      run_projection(sample_fundamentals, ProjectionAssumptions(years=-1))

  def test_non_positive_shares(self, sample_fundamentals):
    data = dataclasses.replace(
        sample_fundamentals,
        current_metrics=CurrentMetrics(price=100.0, pe_ratio=50.0,
                                       shares_outstanding=0.0),
    )

    with pytest.raises(InvalidAssumptionError, match='shares outstanding'):
      run_projection(data)

  def test_non_finite_pe_ratio(self, sample_fundamentals):
    """A NaN P/E ratio is rejected instead of reaching the baseline."""
    data = dataclasses.replace(
        sample_fundamentals,
        current_metrics=CurrentMetrics(price=100.0, pe_ratio=float('nan'),
                                       shares_outstanding=1000.0),
    )

    with pytest.raises(InvalidAssumptionError, match='P/E ratio'):
      run_projection(data)

  def test_negative_threshold(self, sample_fundamentals):
    with pytest.raises(InvalidAssumptionError, match='consensus_threshold'):
      run_projection(sample_fundamentals, consensus_threshold=-1.0)

  def test_insufficient_data(self, sample_fundamentals):
    data = dataclasses.replace(sample_fundamentals, historical=())

    with pytest.raises(InsufficientDataError):
      run_projection(data)

  def test_unknown_scenario_view(self, sample_fundamentals):
    results = run_projection(sample_fundamentals)

    with pytest.raises(KeyError):
      results.scenario('stress')
