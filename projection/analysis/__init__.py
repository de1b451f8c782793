'''Tabular export utilities for projection results.'''

from projection.analysis.export import projections_frame
from projection.analysis.export import reconciliation_frame
from projection.analysis.export import summary_frame

__all__ = [
    'projections_frame',
    'reconciliation_frame',
    'summary_frame',
]
