'''
Forward projection engine for bear/base/bull scenario analysis.

Given a security's historical financials and a set of growth and valuation
assumptions, this package compounds revenue, margin and share count year by
year for three scenarios, values each year on P/E or P/S depending on
profitability, and summarizes each scenario with CAGRs and a comparison
against analyst consensus.

Usage:
  from projection.providers import MockFundamentalsProvider
  from projection.run import run_projection
  from projection.scenarios.config import ProjectionAssumptions

  fundamentals = MockFundamentalsProvider().fetch('NVDA')
  results = run_projection(fundamentals, ProjectionAssumptions.default())
'''
