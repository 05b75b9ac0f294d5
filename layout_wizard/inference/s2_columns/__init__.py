"""Stage 2: Column Assignment."""
from .stage import ColumnAssignmentStage, ColumnResult, assign_columns

__all__ = ["ColumnAssignmentStage", "ColumnResult", "assign_columns"]
