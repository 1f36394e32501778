"""Pytest configuration and shared fixtures."""

import json
import sys
from pathlib import Path

import pytest

# Make the src/ layout importable without an install
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root / "src"))

from whitted.camera.camera import Camera  # noqa: E402
from whitted.config import RenderSettings  # noqa: E402
from whitted.core.vector import Vector2, Vector3  # noqa: E402
from whitted.geometry.mesh import Mesh, Triangle, Vertex  # noqa: E402
from whitted.geometry.transform import Transformation  # noqa: E402
from whitted.materials.material import Material  # noqa: E402
from whitted.scene.scene import Light, Scene, Shape  # noqa: E402


def make_triangle(p0, p1, p2, normal=None, texcoords=None) -> Triangle:
    """Triangle from three position tuples; the normal defaults to the face normal."""
    positions = [Vector3(*p) for p in (p0, p1, p2)]
    if normal is None:
        normal = (positions[1] - positions[0]).cross(positions[2] - positions[0]).normalize()
    else:
        normal = Vector3(*normal)
    texcoords = texcoords or [(0, 0), (1, 0), (0, 1)]
    return Triangle(*(Vertex(p, normal.copy(), Vector2(*uv)) for p, uv in zip(positions, texcoords)))


def make_quad(z: float, half: float = 10.0, facing: float = 1.0) -> Mesh:
    """Two triangles covering [-half, half]^2 in the plane at `z`, normal +-Z."""
    a, b, c, d = (-half, -half, z), (half, -half, z), (half, half, z), (-half, half, z)
    normal = (0, 0, facing)
    return Mesh([make_triangle(a, b, c, normal), make_triangle(a, c, d, normal)])


@pytest.fixture
def quiet_settings():
    return RenderSettings(verbose=False)


@pytest.fixture
def unit_triangle_mesh():
    """A unit triangle in the z = 0 plane, facing +Z."""
    return Mesh([make_triangle((-0.5, -0.5, 0), (0.5, -0.5, 0), (0, 0.5, 0))])


@pytest.fixture
def lit_triangle_scene(unit_triangle_mesh):
    """
    One white triangle seen head-on by a 1x1 camera, a white ambient light
    of 0.2 and a white directional light of 1.0 shining at it at 45 degrees.
    """
    scene = Scene(Camera(from_point=Vector3(0, 0, 5), to_point=Vector3(0, 0, 0), x_res=1, y_res=1))
    scene.add_mesh("tri", unit_triangle_mesh)
    scene.add_shape(Shape("triangle", "tri", Material(Vector3(1, 1, 1), ka=1.0, kd=1.0, ks=0.0)))
    scene.ambient = Light(Vector3(1, 1, 1), 0.2)
    scene.directional = Light(Vector3(1, 1, 1), 1.0, Vector3(0, -1, -1).normalize())
    return scene


@pytest.fixture
def assets_dir(tmp_path):
    """An assets directory holding a JSON triangle mesh and an OBJ quad."""
    assets = tmp_path / "assets"
    assets.mkdir()
    tri = {
        "data": [{
            "v0": {"v": [-0.5, -0.5, 0], "n": [0, 0, 1], "t": [0, 0]},
            "v1": {"v": [0.5, -0.5, 0], "n": [0, 0, 1], "t": [1, 0]},
            "v2": {"v": [0, 0.5, 0], "n": [0, 0, 1], "t": [0.5, 1]},
        }]
    }
    (assets / "tri.json").write_text(json.dumps(tri))
    (assets / "quad.obj").write_text(
        "# unit quad\n"
        "v -1 -1 0\nv 1 -1 0\nv 1 1 0\nv -1 1 0\n"
        "vt 0 0\nvt 1 0\nvt 1 1\nvt 0 1\n"
        "f 1/1 2/2 3/3 4/4\n"
    )
    return assets


@pytest.fixture
def scene_document():
    return {
        "scene": {
            "shapes": [
                {
                    "id": "floor",
                    "geometry": "quad",
                    "notes": "ground plane",
                    "material": {"Cs": [0.8, 0.8, 0.8], "Ka": 0.2, "Kd": 0.6, "Ks": 0.1, "n": 8,
                                 "reflective": True, "reflectionStrength": 0.3},
                    "transforms": [{"Rx": -90}, {"S": [4, 4, 1]}, {"T": [0, -1, 0]}],
                },
                {
                    "id": "tri",
                    "geometry": "tri",
                    "material": {"Cs": [1, 0, 0], "Ka": 0.1, "Kd": 0.8, "Ks": 0.3, "n": 32},
                },
            ],
            "camera": {"from": [0, 0, 5], "to": [0, 0, 0],
                       "bounds": [1, 100, 0.5, -0.5, 0.5, -0.5], "resolution": [8, 6]},
            "lights": [
                {"type": "ambient", "color": [1, 1, 1], "intensity": 0.2},
                {"type": "directional", "color": [1, 1, 1], "intensity": 1.0,
                 "from": [0, 5, 5], "to": [0, 0, 0]},
                {"type": "point", "color": [1, 0.9, 0.8], "intensity": 0.5, "from": [2, 2, 2]},
            ],
        }
    }


@pytest.fixture
def scene_file(tmp_path, scene_document):
    path = tmp_path / "scene.json"
    path.write_text(json.dumps(scene_document))
    return path
