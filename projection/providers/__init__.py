"""
Fundamentals providers.

Providers hand FundamentalData to the engine. The engine does not care
whether it came from a file or the deterministic mock fallback.

To add a new provider:
1. Subclass FundamentalsProvider
2. Implement fetch() returning FundamentalData
3. Raise FileNotFoundError / ValueError so fetch_with_fallback can recover

Example:
  class MyProvider(FundamentalsProvider):
    def fetch(self, symbol: str) -> FundamentalData:
      payload = ...  # your source
      return FundamentalData.from_dict(payload)
"""

from projection.providers.base import fetch_with_fallback
from projection.providers.base import FundamentalsProvider
from projection.providers.json_file import JsonFundamentalsProvider
from projection.providers.mock import MockFundamentalsProvider

__all__ = [
  'FundamentalsProvider',
  'JsonFundamentalsProvider',
  'MockFundamentalsProvider',
  'fetch_with_fallback',
]
