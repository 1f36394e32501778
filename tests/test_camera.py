"""Tests for primary ray generation."""

import math

import pytest

from whitted.camera.camera import Camera
from whitted.core.vector import Vector3
from whitted.errors import SceneError


def test_centre_ray_follows_view_direction():
    camera = Camera(Vector3(1, 2, 3), Vector3(4, 2, -1), x_res=1, y_res=1)
    ray = camera.generate_ray(0, 0)
    assert ray.origin == Vector3(1, 2, 3)
    d, v = ray.direction, camera.view_direction
    assert (d.x, d.y, d.z) == pytest.approx((v.x, v.y, v.z), abs=1e-9)
    assert d.length() == pytest.approx(1.0)


def test_top_left_pixel_points_up_and_left():
    camera = Camera(x_res=10, y_res=10)
    ray = camera.generate_ray(0, 0)
    assert ray.direction.x < 0
    assert ray.direction.y > 0

    assert py == pytest.approx(y + 0.5, abs=1e-6)


def test_looking_straight_down():
    camera = Camera(Vector3(0, 5, 0), Vector3(0, 0, 0), x_res=2, y_res=2)
    ray = camera.generate_ray(0, 0)
    assert not any(math.isnan(c) for c in ray.direction)
    assert ray.direction.y < 0


@pytest.mark.parametrize("kwargs", [
    {"x_res": 0},
    {"y_res": -1},
    {"near": 0},
    {"near": 10, "far": 5},
    {"left": 0.5, "right": 0.5},
    {"from_point": Vector3(0, 0, 0), "to_point": Vector3(0, 0, 0)},
])
def test_validate_rejects_bad_cameras(kwargs):
    with pytest.raises(SceneError):
        Camera(**kwargs).validate()
