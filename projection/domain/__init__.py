"""Domain types for the projection engine."""

from projection.domain.types import AnalystEstimate
from projection.domain.types import AnalystEstimates
from projection.domain.types import CagrMetrics
from projection.domain.types import ConsensusStatus
from projection.domain.types import CurrentMetrics
from projection.domain.types import EpsReconciliation
from projection.domain.types import FinancialProjection
from projection.domain.types import FundamentalData
from projection.domain.types import HistoricalFinancial
from projection.domain.types import ProjectionResults
from projection.domain.types import ScenarioCagr
from projection.domain.types import ScenarioParams
from projection.domain.types import ValuationMethod
from projection.domain.types import YearlyProjection

__all__ = [
    'AnalystEstimate',
    'AnalystEstimates',
    'CagrMetrics',
    'ConsensusStatus',
    'CurrentMetrics',
    'EpsReconciliation',
    'FinancialProjection',
    'FundamentalData',
    'HistoricalFinancial',
    'ProjectionResults',
    'ScenarioCagr',
    'ScenarioParams',
    'ValuationMethod',
    'YearlyProjection',
]
