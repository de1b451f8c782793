'''
Single-security projection entrypoint.

This module provides the main entry point for running projections. It:
1. Validates assumptions and current metrics
2. Resolves the baseline year from historical data
3. Projects bear, base and bull independently
4. Computes CAGR and analyst reconciliation
5. Returns an immutable ProjectionResults

Usage:
  from projection.providers import MockFundamentalsProvider
  from projection.run import run_projection
  from projection.scenarios.config import ProjectionAssumptions

  fundamentals = MockFundamentalsProvider().fetch('NVDA')
  results = run_projection(fundamentals, ProjectionAssumptions.default())
  print(results.cagr.base.share_price)
'''

import argparse
import dataclasses
import logging
import math
from pathlib import Path
from typing import Optional

import pandas as pd

from projection.analysis.export import projections_frame
from projection.analysis.export import summary_frame
from projection.domain.types import FundamentalData
from projection.domain.types import ProjectionResults
from projection.domain.types import YearlyProjection
from projection.engine.baseline import resolve_baseline
from projection.engine.cagr import compute_scenario_cagr
from projection.engine.projector import project_scenario
from projection.engine.reconcile import DEFAULT_THRESHOLD
from projection.engine.reconcile import reconcile_eps
from projection.errors import InvalidAssumptionError
from projection.providers.base import fetch_with_fallback
from projection.providers.json_file import JsonFundamentalsProvider
from projection.providers.mock import MockFundamentalsProvider
from projection.scenarios.config import ProjectionAssumptions
from projection.scenarios.registry import create_scenarios

logger = logging.getLogger(__name__)


def validate_inputs(
    fundamentals: FundamentalData,
    assumptions: ProjectionAssumptions,
    consensus_threshold: float,
) -> None:
  '''
  Check everything that could fail before any year is projected.

  Raises:
    InvalidAssumptionError: If assumptions, shares outstanding, price,
      P/E ratio or threshold are out of range
  '''
  assumptions.validate()

  shares = fundamentals.current_metrics.shares_outstanding
  if not math.isfinite(shares) or shares <= 0:
    raise InvalidAssumptionError(
        f'{fundamentals.symbol}: shares outstanding must be positive, '
        f'got {shares}')

  price = fundamentals.current_metrics.price
  if not math.isfinite(price):
    raise InvalidAssumptionError(
        f'{fundamentals.symbol}: price must be finite, got {price}')

  pe_ratio = fundamentals.current_metrics.pe_ratio
  if not math.isfinite(pe_ratio):
    raise InvalidAssumptionError(
        f'{fundamentals.symbol}: P/E ratio must be finite, got {pe_ratio}')

  if not math.isfinite(consensus_threshold) or consensus_threshold < 0:
    raise InvalidAssumptionError(
        f'consensus_threshold must be non-negative, got {consensus_threshold}')


def run_projection(
    fundamentals: FundamentalData,
    assumptions: Optional[ProjectionAssumptions] = None,
    consensus_threshold: float = DEFAULT_THRESHOLD,
) -> ProjectionResults:
  '''
  Run bear/base/bull projections for a single security.

  Args:
    fundamentals: Fully resolved fundamentals
    assumptions: ProjectionAssumptions (default: ProjectionAssumptions.default())
    consensus_threshold: Percent band treated as aligned with consensus

  Returns:
    ProjectionResults with baseline, yearly projections, CAGR and EPS
    reconciliation

  Raises:
    InsufficientDataError: If no baseline year can be resolved
    InvalidAssumptionError: If assumptions or current metrics are invalid
  '''
  if assumptions is None:
    assumptions = ProjectionAssumptions.default()

  validate_inputs(fundamentals, assumptions, consensus_threshold)

  metrics = fundamentals.current_metrics
  baseline = resolve_baseline(fundamentals.historical, metrics)
  logger.debug('%s: baseline year %d, revenue %.2fB, margin %.2f%%',
               fundamentals.symbol, baseline.year, baseline.revenue,
               baseline.net_income_margins)

  scenarios = {
      name: project_scenario(
          baseline=baseline,
          params=params,
          shares_outstanding=metrics.shares_outstanding,
          analyst_estimates=fundamentals.analyst_estimates,
      ) for name, params in create_scenarios(assumptions).items()
  }

  projections = tuple(
      YearlyProjection(year=bear.year, bear=bear, base=base, bull=bull)
      for bear, base, bull in zip(scenarios['bear'], scenarios['base'],
                                  scenarios['bull']))

  cagr = compute_scenario_cagr(
      baseline,
      metrics.price,
      bear=scenarios['bear'],
      base=scenarios['base'],
      bull=scenarios['bull'],
  )

  return ProjectionResults(
      baseline=baseline,
      projections=projections,
      cagr=cagr,
      reconciliation=reconcile_eps(projections, consensus_threshold),
  )


def _fmt_pct(value: Optional[float]) -> str:
  return 'n/a' if value is None or pd.isna(value) else f'{value:.2f}%'


def main() -> None:
  '''CLI entrypoint.'''
  parser = argparse.ArgumentParser(
      description='Run bear/base/bull forward projections')
  parser.add_argument('--symbol',
                      type=str,
                      required=True,
                      help='Ticker symbol')
  parser.add_argument(
      '--data-dir',
      type=Path,
      default=Path('data/fundamentals'),
      help='Directory of <SYMBOL>.json fundamentals (falls back to mock data)',
  )
  parser.add_argument('--assumptions',
                      type=Path,
                      default=None,
                      help='JSON file with projection assumptions')
  parser.add_argument('--years',
                      type=int,
                      default=None,
                      help='Override the projection horizon')
  parser.add_argument(
      '--consensus-threshold',
      type=float,
      default=DEFAULT_THRESHOLD,
      help='Percent band treated as aligned with analyst consensus',
  )
  parser.add_argument('--output-dir',
                      type=Path,
                      default=None,
                      help='Write projection and summary CSVs here')
  parser.add_argument('-v',
                      '--verbose',
                      action='store_true',
                      help='Enable debug logging')
  args = parser.parse_args()

  logging.basicConfig(
      level=logging.DEBUG if args.verbose else logging.INFO,
      format='%(message)s',
  )

  if args.assumptions is not None:
    assumptions = ProjectionAssumptions.from_json(
        args.assumptions.read_text(encoding='utf-8'))
  else:
    assumptions = ProjectionAssumptions.default()

  if args.years is not None:
    assumptions = dataclasses.replace(assumptions, years=args.years)

  fundamentals = fetch_with_fallback(
      args.symbol,
      provider=JsonFundamentalsProvider(args.data_dir),
      fallback=MockFundamentalsProvider(),
  )

  results = run_projection(fundamentals, assumptions,
                           args.consensus_threshold)
  summary = summary_frame(results, fundamentals.current_metrics.price)

  separator = '=' * 70
  logger.info('\n%s', separator)
  logger.info('Forward Projection - %s', fundamentals.symbol)
  logger.info(separator)

  baseline = results.baseline
  logger.info('\nBaseline (%d, actual):', baseline.year)
  logger.info('  Revenue: $%.2fB', baseline.revenue)
  logger.info('  Net Income: $%.2fB', baseline.net_income)
  logger.info('  Net Margin: %.2f%%', baseline.net_income_margins)
  logger.info('  EPS: $%.2f', baseline.eps)
  logger.info('  Price: $%.2f', fundamentals.current_metrics.price)

  for row in summary.itertuples(index=False):
    logger.info('\n%s (%d):', row.scenario.capitalize(), row.final_year)
    logger.info('  Target Price: $%.2f (%s)', row.target_price,
                row.valuation_method)
    logger.info('  Upside: %s', _fmt_pct(row.upside_percent))
    logger.info('  Revenue CAGR: %s', _fmt_pct(row.revenue_cagr))
    logger.info('  Share Price CAGR: %s', _fmt_pct(row.share_price_cagr))

  for rec in results.reconciliation:
    logger.info('  %d %s: EPS $%.2f vs consensus $%.2f -> %s', rec.year,
                rec.scenario, rec.eps, rec.analyst_eps, rec.status.value)

  if args.output_dir is not None:
    args.output_dir.mkdir(parents=True, exist_ok=True)
    symbol = fundamentals.symbol.upper()
    projections_path = args.output_dir / f'{symbol}_projections.csv'
    summary_path = args.output_dir / f'{symbol}_summary.csv'
    projections_frame(results).to_csv(projections_path, index=False)
    summary.to_csv(summary_path, index=False)
    logger.info('\nWrote %s and %s', projections_path, summary_path)

  logger.info('%s\n', separator)


if __name__ == '__main__':
  main()
