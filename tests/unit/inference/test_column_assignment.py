"""
Unit-тесты для Stage 2: Column Assignment.
"""

from contracts.key_dto import Key
from layout_wizard.inference.s1_rows.stage import RowClusteringStage, cluster_into_rows
from layout_wizard.inference.s2_columns.stage import ColumnAssignmentStage, assign_columns


def grid_ids(columns):
    return [[placed.key.id if placed else None for placed in column] for column in columns]


class TestAssignColumns:

    def test_aligned_grid(self):
        keys = [
            Key(id="a", x=0, y=0), Key(id="b", x=1, y=0),
            Key(id="c", x=0, y=1), Key(id="d", x=1, y=1),
        ]
        columns = assign_columns(cluster_into_rows(keys))
        assert grid_ids(columns) == [["a", "c"], ["b", "d"]]

    def test_tie_goes_to_upper_row(self):
        """При равном X первым берётся верхний ряд, нижний ложится в ту же колонку."""
        keys = [Key(id="bottom", x=0, y=1), Key(id="top", x=0, y=0)]
        columns = assign_columns(cluster_into_rows(keys))
        assert grid_ids(columns) == [["top", "bottom"]]

    def test_row_stagger_shares_column(self):
        """Сдвиг ряда на 0.25U не создаёт лишних колонок."""
        keys = [
            Key(id="q", x=0, y=0), Key(id="w", x=1, y=0),
            Key(id="a", x=0.25, y=1), Key(id="s", x=1.25, y=1),
        ]
        columns = assign_columns(cluster_into_rows(keys))
        assert grid_ids(columns) == [["q", "a"], ["w", "s"]]

    def test_occupied_slot_opens_new_column(self):
        keys = [
            Key(id="a", x=0, y=0), Key(id="b", x=0.5, y=0),
            Key(id="c", x=0, y=1),
        ]
        columns = assign_columns(cluster_into_rows(keys))
        assert grid_ids(columns) == [["a", "c"], ["b", None]]

    def test_gap_in_row_leaves_empty_slot(self):
        keys = [
            Key(id="a", x=0, y=0), Key(id="b", x=1, y=0), Key(id="c", x=2, y=0),
            Key(id="d", x=0, y=1), Key(id="e", x=2, y=1),
        ]
        columns = assign_columns(cluster_into_rows(keys))
        assert grid_ids(columns) == [["a", "d"], ["b", None], ["c", "e"]]

    def test_each_key_placed_once(self):
        keys = [Key(x=x * 0.7, y=(x % 3) * 0.9) for x in range(12)]
        columns = assign_columns(cluster_into_rows(keys))
        placed = [p.key.id for column in columns for p in column if p is not None]
        assert sorted(placed) == sorted(key.id for key in keys)

    def test_no_rows(self):
        assert assign_columns([]) == []


class TestColumnAssignmentStage:

    def test_process(self):
        keys = [Key(x=x, y=y) for y in range(2) for x in range(3)]
        rows = RowClusteringStage().process(keys)
        result = ColumnAssignmentStage().process(rows)

        assert result.row_count == 2
        assert result.column_count == 3
        assert result.to_dict()["column_count"] == 3
