"""Stage 3: Compaction & Finalization."""
from .stage import FinalizeStage, FinalizeResult, compact_columns, finalize_grid, sort_keys

__all__ = ["FinalizeStage", "FinalizeResult", "compact_columns", "finalize_grid", "sort_keys"]
