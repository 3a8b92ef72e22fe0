"""Portfolio weighting"""

from .allocators import (
    blend_views,
    default_blended_allocation,
    default_sharpe_allocation,
    optimize_sharpe,
)

__all__ = [
    "optimize_sharpe",
    "blend_views",
    "default_sharpe_allocation",
    "default_blended_allocation",
]
