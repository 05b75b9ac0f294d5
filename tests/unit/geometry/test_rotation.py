"""
Unit-тесты для редактора поворота клавиш.

ЦКП: Визуальный центр клавиши не сдвигается при смене режима или якоря.
"""

import pytest

from contracts.key_dto import ExplicitOrigin, Key, KeyOrigin, Point
from layout_wizard.geometry.kernel import key_polygon
from layout_wizard.geometry.rotation import (
    angle_between_points,
    apply_anchor_rotation,
    apply_local_center_rotation,
    calculate_default_anchor_position,
    distance,
    move_anchor_without_affecting_position,
    normalize_angle,
    normalize_to_local_center,
    rotated_center,
    unrotated_center,
)


def assert_same_point(a: Point, b: Point, abs_tol: float = 2e-3):
    assert a.x == pytest.approx(b.x, abs=abs_tol)
    assert a.y == pytest.approx(b.y, abs=abs_tol)


@pytest.fixture
def rotated_key():
    return Key(x=2, y=1, w=1.5, h=1, r=30, rx=1, ry=3)


class TestAngles:

    @pytest.mark.parametrize("angle, expected", [
        (0, 0),
        (360, 0),
        (-90, 270),
        (450, 90),
        (-1e-20, 0),
    ])
    def test_normalize_angle(self, angle, expected):
        """Должен приводить угол к [0, 360)."""
        result = normalize_angle(angle)
        assert 0 <= result < 360
        assert result == pytest.approx(expected)

    def test_angle_between_points(self):
        assert angle_between_points(Point(0, 0), Point(1, 0)) == pytest.approx(0)
        assert angle_between_points(Point(0, 0), Point(0, 1)) == pytest.approx(90)
        assert angle_between_points(Point(0, 0), Point(0, -1)) == pytest.approx(-90)

    def test_distance(self):
        assert distance(Point(0, 0), Point(3, 4)) == pytest.approx(5)


class TestCenters:

    def test_unrotated_center(self, rotated_key):
        assert unrotated_center(rotated_key) == Point(2.75, 1.5)

    def test_rotated_center_without_rotation(self):
        key = Key(x=1, y=1, w=2, h=2)
        assert rotated_center(key) == Point(2, 2)


class TestLocalCenterMode:

    def test_normalize_keeps_visual_center(self, rotated_key):
        """Перенос центра поворота в центр клавиши не двигает клавишу."""
        before = rotated_center(rotated_key)
        after = normalize_to_local_center(rotated_key)

        assert after.r == rotated_key.r
        assert after.rx == pytest.approx(before.x, abs=1e-3)
        assert after.ry == pytest.approx(before.y, abs=1e-3)
        assert_same_point(rotated_center(after), before)

    def test_normalize_does_not_mutate_input(self, rotated_key):
        normalize_to_local_center(rotated_key)
        assert (rotated_key.x, rotated_key.y, rotated_key.rx, rotated_key.ry) == (2, 1, 1, 3)

    def test_local_rotation_keeps_center(self):
        key = Key(x=0, y=0, w=2, h=1)
        rotated = apply_local_center_rotation(key, 45)

        assert rotated.r == 45
        assert (rotated.rx, rotated.ry) == (1, 0.5)
        assert_same_point(rotated_center(rotated), Point(1, 0.5))

    def test_local_rotation_wraps_angle(self):
        key = Key(x=0, y=0, r=350)
        assert apply_local_center_rotation(key, 20).r == pytest.approx(10)


class TestAnchorMode:

    def test_anchor_below_gives_zero_angle(self):
        """Якорь прямо под клавишей => r = 0."""
        key = Key(x=0, y=0, w=1, h=1)
        result = apply_anchor_rotation(key, Point(0.5, 3))

        assert result.r == pytest.approx(0)
        assert (result.rx, result.ry) == (0.5, 3)
        assert_same_point(rotated_center(result), Point(0.5, 0.5))

    def test_anchor_rotation_keeps_center(self, rotated_key):
        before = rotated_center(rotated_key)
        result = apply_anchor_rotation(rotated_key, Point(-1, 5))
        assert_same_point(rotated_center(result), before)

    def test_anchor_on_the_left_rotates_clockwise(self):
        key = Key(x=0, y=0, w=1, h=1)
        result = apply_anchor_rotation(key, Point(-2.5, 0.5))
        assert result.r == pytest.approx(90)
        assert_same_point(rotated_center(result), Point(0.5, 0.5))

    def test_default_anchor_below_unrotated_key(self):
        key = Key(x=0, y=0, w=1, h=1)
        assert calculate_default_anchor_position(key) == Point(0.5, 2.5)

    def test_default_anchor_distance(self, rotated_key):
        anchor = calculate_default_anchor_position(rotated_key, distance_from_center=3)
        assert distance(anchor, rotated_center(rotated_key)) == pytest.approx(3, abs=1e-2)

    def test_move_anchor_keeps_position(self, rotated_key):
        before = rotated_center(rotated_key)
        moved = move_anchor_without_affecting_position(rotated_key, Point(10, -4))

        assert moved.r == rotated_key.r
        assert (moved.rx, moved.ry) == (10, -4)
        assert_same_point(rotated_center(moved), before)


class TestPivotAtWorldOrigin:
    """Центр поворота ровно в (0, 0) нельзя записать как rx=ry=0 напрямую."""

    def test_move_anchor_to_origin(self, rotated_key):
        before = rotated_center(rotated_key)
        moved = move_anchor_without_affecting_position(rotated_key, Point(0, 0))

        assert moved.r == rotated_key.r
        assert isinstance(moved.rotation_origin, KeyOrigin)
        assert_same_point(rotated_center(moved), before)

    def test_anchor_rotation_to_origin(self, rotated_key):
        before = rotated_center(rotated_key)
        result = apply_anchor_rotation(rotated_key, Point(0, 0))
        assert_same_point(rotated_center(result), before)

    def test_normalize_with_center_at_origin(self):
        # Неповёрнутый центр (0, -2), поворот на 180 вокруг (0, -1) => центр (0, 0)
        key = Key(x=-0.5, y=-2.5, w=1, h=1, r=180, rx=0, ry=-1)
        assert_same_point(rotated_center(key), Point(0, 0))

        result = normalize_to_local_center(key)
        assert_same_point(rotated_center(result), Point(0, 0))

    def test_local_rotation_with_center_at_origin(self):
        key = Key(x=-1, y=-0.5, w=2, h=1)
        rotated = apply_local_center_rotation(key, 90)

        assert rotated.r == 90
        assert_same_point(rotated_center(rotated), Point(0, 0))


class TestWithRotationOrigin:

    def test_explicit_origin(self):
        key = Key(x=1, y=1, r=15).with_rotation_origin(ExplicitOrigin(x=3, y=4))
        assert (key.x, key.y, key.rx, key.ry) == (1, 1, 3, 4)
        assert key.rotation_origin == ExplicitOrigin(x=3, y=4)

    def test_key_origin(self):
        key = Key(x=1, y=1, r=15, rx=3, ry=4).with_rotation_origin(KeyOrigin())
        assert (key.x, key.y, key.rx, key.ry) == (1, 1, 0, 0)

    def test_world_origin_keeps_polygon(self):
        """(0, 0) превращается в KeyOrigin с перенесённым углом, полигон тот же."""
        key = Key(x=2, y=1, w=1.5, h=1, r=30, rx=5, ry=5)
        expected = key_polygon(
            Key(x=2, y=1, w=1.5, h=1, r=30, rx=1e-9, ry=0)
        )

        converted = key.with_rotation_origin(ExplicitOrigin(x=0, y=0))

        assert isinstance(converted.rotation_origin, KeyOrigin)
        for actual, target in zip(key_polygon(converted), expected):
            assert_same_point(actual, target, abs_tol=1e-6)

    def test_world_origin_without_rotation(self):
        key = Key(x=2, y=1, rx=5, ry=5).with_rotation_origin(ExplicitOrigin(x=0, y=0))
        assert (key.x, key.y, key.rx, key.ry) == (2, 1, 0, 0)

    def test_returns_copy(self):
        key = Key(x=2, y=1, r=30, rx=5, ry=5)
        key.with_rotation_origin(ExplicitOrigin(x=0, y=0))
        assert (key.x, key.y, key.rx, key.ry) == (2, 1, 5, 5)
