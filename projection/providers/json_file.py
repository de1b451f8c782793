"""
Caching loader for fundamentals stored as JSON files.

Each symbol lives in its own file, <data_dir>/<SYMBOL>.json, in the same
camelCase format the engine's consumers exchange:

  {
    "symbol": "AAPL",
    "historical": [{"year": 2024, "revenue": 391.0, "netIncome": 93.7,
                    "eps": 6.11}, ...],
    "currentMetrics": {"price": 230.0, "peRatio": 37.6,
                       "sharesOutstanding": 15200.0},
    "analystEstimates": {"revenue": [...], "eps": [...]}
  }

Usage:
  provider = JsonFundamentalsProvider(Path('data/fundamentals'))
  for symbol in symbols:
    data = provider.fetch(symbol)
"""

import json
from pathlib import Path
from typing import Dict

from projection.domain.types import FundamentalData
from projection.providers.base import FundamentalsProvider


class JsonFundamentalsProvider(FundamentalsProvider):
  """
  Cached file-backed fundamentals.

  Parsed files are kept per symbol so repeated projections for the same
  symbol (e.g. with different assumptions) read the file once.
  """

  def __init__(self, data_dir: Path = Path('data/fundamentals')):
    """
    Initialize provider.

    Args:
      data_dir: Directory holding <SYMBOL>.json files
    """
    self.data_dir = data_dir
    self._cache: Dict[str, FundamentalData] = {}

  def path_for(self, symbol: str) -> Path:
    """File path for a symbol."""
    return self.data_dir / f'{symbol.upper()}.json'

  def fetch(self, symbol: str) -> FundamentalData:
    """
    Load and cache fundamentals for a symbol.

    Raises:
      FileNotFoundError: If the symbol's file does not exist
      ValueError: If the file is not valid fundamentals JSON
    """
    key = symbol.upper()
    if key in self._cache:
      return self._cache[key]

    path = self.path_for(key)
    if not path.exists():
      raise FileNotFoundError(f'Fundamentals not found: {path}')

    try:
      payload = json.loads(path.read_text(encoding='utf-8'))
    except json.JSONDecodeError as e:
      raise ValueError(f'Invalid JSON in {path}: {e}') from e

    data = FundamentalData.from_dict(payload)
    self._cache[key] = data
    return data

  def clear_cache(self) -> None:
    """Clear all cached fundamentals."""
    self._cache.clear()
