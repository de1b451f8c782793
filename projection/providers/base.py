'''
Fundamentals provider interface.

A provider turns a ticker symbol into FundamentalData. The engine never
talks to a provider directly; the caller fetches first and hands the fully
resolved data to run_projection.
'''

from abc import ABC, abstractmethod
import logging

from projection.domain.types import FundamentalData

logger = logging.getLogger(__name__)


class FundamentalsProvider(ABC):
  '''
  Base class for fundamentals sources.

  Subclasses implement fetch() to return complete fundamentals for a symbol.
  '''

  @abstractmethod
  def fetch(self, symbol: str) -> FundamentalData:
    '''
    Fetch fundamentals for a symbol.

    Args:
      symbol: Ticker symbol

    Returns:
      FundamentalData for the symbol

    Raises:
      FileNotFoundError: If the source has no data for the symbol
      ValueError: If the source data is malformed
    '''


def fetch_with_fallback(
    symbol: str,
    provider: FundamentalsProvider,
    fallback: FundamentalsProvider,
) -> FundamentalData:
  '''
  Fetch from a provider, falling back to another on failure.

  There is no retry: a failed fetch goes straight to the fallback.

  Args:
    symbol: Ticker symbol
    provider: Preferred source
    fallback: Source used when the preferred one fails

  Returns:
    FundamentalData from whichever source succeeded
  '''
  try:
    data = provider.fetch(symbol)
    logger.info('Loaded fundamentals for %s from %s', symbol,
                type(provider).__name__)
    return data
  except (FileNotFoundError, ValueError) as e:
    logger.warning('Failed to load fundamentals for %s: %s. '
                   'Falling back to %s.', symbol, e, type(fallback).__name__)
  return fallback.fetch(symbol)
