"""
Геометрия клавиш: полигоны, центры, bounding box, поворот.
"""

from .kernel import (
    effective_rotation_origin,
    rotate_point,
    key_polygon,
    key_center,
    keys_bounding_box,
    polygon_bounding_box,
    bounding_box_center,
    scale_polygon,
    project_polygon,
    polygons_intersect,
    point_in_polygon,
)

__all__ = [
    "effective_rotation_origin",
    "rotate_point",
    "key_polygon",
    "key_center",
    "keys_bounding_box",
    "polygon_bounding_box",
    "bounding_box_center",
    "scale_polygon",
    "project_polygon",
    "polygons_intersect",
    "point_in_polygon",
]
