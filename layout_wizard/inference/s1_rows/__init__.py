"""Stage 1: Row Clustering."""
from .stage import (
    RowClusteringStage,
    RowResult,
    RowStrategy,
    PlacedKey,
    place_keys,
    cluster_into_rows,
    cluster_by_x_breaks,
)

__all__ = [
    "RowClusteringStage",
    "RowResult",
    "RowStrategy",
    "PlacedKey",
    "place_keys",
    "cluster_into_rows",
    "cluster_by_x_breaks",
]
