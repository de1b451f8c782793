import pytest

from projection.analysis.export import PROJECTION_COLUMNS
from projection.analysis.export import projections_frame
from projection.analysis.export import reconciliation_frame
from projection.analysis.export import summary_frame
from projection.analysis.export import SUMMARY_COLUMNS
from projection.run import run_projection
from projection.scenarios.config import ProjectionAssumptions


class TestProjectionsFrame:
  """Tests for projections_frame function."""

  def test_rows(self, sample_fundamentals):
    """Baseline row plus three rows per projected year."""
    results = run_projection(sample_fundamentals,
                             ProjectionAssumptions(years=3))

    df = projections_frame(results)

    assert list(df.columns) == PROJECTION_COLUMNS
    assert len(df) == 1 + 3 * 3
    assert df.iloc[0]['scenario'] == 'actual'
    assert df.iloc[0]['year'] == 2024
    assert df.iloc[1:4]['scenario'].tolist() == ['bear', 'base', 'bull']
    assert df.iloc[1:4]['year'].tolist() == [2025, 2025, 2025]

  def test_multiples(self, sample_fundamentals):
    """P/E multiples fill the multiple columns for profitable years."""
    results = run_projection(sample_fundamentals,
                             ProjectionAssumptions(years=1))

    df = projections_frame(results)
    bull = df[df['scenario'] == 'bull'].iloc[0]

    assert bull['valuation_method'] == 'PE'
    assert bull['multiple_low'] == 50.0
    assert bull['multiple_high'] == 60.0


class TestSummaryFrame:
  """Tests for summary_frame function."""

  def test_target_and_upside(self, sample_fundamentals):
    """Bull year 3: EPS 77.625 -> target 77.625 * 55 = 4269.375."""
    results = run_projection(sample_fundamentals,
                             ProjectionAssumptions(years=3))

    df = summary_frame(results, current_price=100.0)
    bull = df[df['scenario'] == 'bull'].iloc[0]

    assert list(df.columns) == SUMMARY_COLUMNS
    assert bull['final_year'] == 2027
    assert bull['target_price'] == pytest.approx(4269.375)
    assert bull['upside_percent'] == pytest.approx(4169.375)
    assert bull['revenue_cagr'] == pytest.approx(50.0)

  def test_empty_horizon(self, sample_fundamentals):
    results = run_projection(sample_fundamentals,
                             ProjectionAssumptions(years=0))

    df = summary_frame(results, current_price=100.0)

    assert df.empty
    assert list(df.columns) == SUMMARY_COLUMNS


class TestReconciliationFrame:
  """Tests for reconciliation_frame function."""

  def test_rows(self, sample_fundamentals):
    """Two consensus years times three scenarios."""
    results = run_projection(sample_fundamentals,
                             ProjectionAssumptions(years=3))

    df = reconciliation_frame(results)

    assert len(df) == 6
    assert set(df['year']) == {2025, 2026}
    assert set(df['status']) <= {
        'Aligned', 'Above consensus', 'Below consensus'
    }
