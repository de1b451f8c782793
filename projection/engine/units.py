"""Unit conversions between reported aggregates and per-share values."""

BILLION = 1e9
MILLION = 1e6


def per_share(amount_billions: float, shares_millions: float) -> float:
  """
  Convert an aggregate in billions to dollars per share.

  Args:
    amount_billions: Aggregate amount (revenue, net income) in billions
    shares_millions: Share count in millions

  Returns:
    Amount per share in dollars
  """
  return amount_billions * BILLION / (shares_millions * MILLION)
