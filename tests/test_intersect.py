"""Tests for the Möller–Trumbore test and the scene-wide nearest hit."""

import math

import pytest
from conftest import make_quad, make_triangle

from whitted.camera.camera import Camera
from whitted.core.matrix import Matrix
from whitted.core.ray import Ray
from whitted.core.vector import Vector3
from whitted.errors import SceneError
from whitted.geometry.intersect import intersect_triangle, raycast_triangle
from whitted.geometry.mesh import Mesh
from whitted.geometry.transform import Transformation, compute_model_matrix
from whitted.geometry.world import World
from whitted.materials.material import Material
from whitted.scene.scene import Scene, Shape

RIGHT_TRIANGLE = ((0, 0, 0), (1, 0, 0), (0, 1, 0))


def down_ray(x, y, z=2.0) -> Ray:
    return Ray(Vector3(x, y, z), Vector3(0, 0, -1))


class TestTriangle:

    def test_centroid_hit(self):
        triangle = make_triangle(*RIGHT_TRIANGLE)
        hit = raycast_triangle(down_ray(1 / 3, 1 / 3), triangle)
        assert hit is not None
        assert hit.u >= 0 and hit.v >= 0 and hit.u + hit.v <= 1
        assert hit.u == pytest.approx(1 / 3, abs=1e-4)
        assert hit.v == pytest.approx(1 / 3, abs=1e-4)
        # Ray-plane distance: origin z = 2 to plane z = 0
        assert hit.distance == pytest.approx(2.0, abs=1e-4)
        assert (hit.hit_point.x, hit.hit_point.y, hit.hit_point.z) == pytest.approx((1 / 3, 1 / 3, 0), abs=1e-4)

    def test_oblique_distance_matches_plane_intersection(self):
        triangle = make_triangle(*RIGHT_TRIANGLE)
        origin = Vector3(-1, -1, 3)
        target = Vector3(0.25, 0.25, 0)
        ray = Ray(origin, (target - origin).normalize())
        hit = raycast_triangle(ray, triangle)
        assert hit.distance == pytest.approx((target - origin).length(), abs=1e-4)

    def test_just_outside_edge_misses(self):
        triangle = make_triangle(*RIGHT_TRIANGLE)
        assert raycast_triangle(down_ray(-1e-3, 0.3), triangle) is None
        assert raycast_triangle(down_ray(0.3, -1e-3), triangle) is None
        assert raycast_triangle(down_ray(0.5 + 1e-3, 0.5 + 1e-3), triangle) is None

    def test_behind_origin_misses(self):
        triangle = make_triangle(*RIGHT_TRIANGLE)
        ray = Ray(Vector3(0.2, 0.2, -2), Vector3(0, 0, -1))
        assert raycast_triangle(ray, triangle) is None

    def test_parallel_ray_misses(self):
        triangle = make_triangle(*RIGHT_TRIANGLE)
        ray = Ray(Vector3(-1, 0.2, 0), Vector3(1, 0, 0))
        assert intersect_triangle(ray, *(vert.position for vert in (triangle.v0, triangle.v1, triangle.v2))) is None

    def test_degenerate_triangle_misses(self):
        triangle = make_triangle((0, 0, 0), (1, 1, 0), (2, 2, 0), normal=(0, 0, 1))
        assert raycast_triangle(down_ray(1, 1), triangle) is None

    def test_must_be_strictly_closer_than_t_max(self):
        triangle = make_triangle(*RIGHT_TRIANGLE)
        assert raycast_triangle(down_ray(0.2, 0.2), triangle, t_max=2.0) is None
        assert raycast_triangle(down_ray(0.2, 0.2), triangle, t_max=2.5) is not None

    def test_back_face_is_hit(self):
        triangle = make_triangle(*RIGHT_TRIANGLE)
        ray = Ray(Vector3(0.2, 0.2, -2), Vector3(0, 0, 1))
        assert raycast_triangle(ray, triangle) is not None

    def test_normal_interpolation(self):
        triangle = make_triangle(*RIGHT_TRIANGLE)
        triangle.v1.normal = Vector3(1, 0, 1).normalize()
        hit = raycast_triangle(down_ray(1 / 3, 1 / 3), triangle)
        assert hit.normal.length() == pytest.approx(1.0)
        assert hit.normal.x > 0

    def test_texcoord_interpolation(self):
        triangle = make_triangle(*RIGHT_TRIANGLE)
        hit = raycast_triangle(down_ray(0.25, 0.5), triangle)
        assert (hit.texcoord.x, hit.texcoord.y) == pytest.approx((0.25, 0.5), abs=1e-6)

    def test_material_is_attached(self):
        material = Material(Vector3(1, 0, 0))
        hit = raycast_triangle(down_ray(0.2, 0.2), make_triangle(*RIGHT_TRIANGLE), material)
        assert hit.material is material


class TestModelMatrix:

    def test_translated_and_scaled(self):
        model = compute_model_matrix(Transformation(Vector3(2, 2, 2), None, Vector3(0, 0, -3)))
        hit = raycast_triangle(down_ray(1.5, 0.2, 5), make_triangle(*RIGHT_TRIANGLE), model_matrix=model)
        assert hit is not None
        assert hit.distance == pytest.approx(8.0, abs=1e-4)

    def test_normals_use_inverse_transpose(self):
        triangle = make_triangle((1, 0, 0), (0, 1, 0), (0, 0, 1))
        model = compute_model_matrix(Transformation(scale=Vector3(1, 2, 1)))
        ray = Ray(Vector3(0, 0, 0), Vector3(1, 1, 1).normalize())
        hit = raycast_triangle(ray, triangle, model_matrix=model)
        assert hit is not None
        expected = Vector3(2, 1, 2).normalize()
        assert (hit.normal.x, hit.normal.y, hit.normal.z) == pytest.approx((expected.x, expected.y, expected.z), abs=1e-6)
        assert hit.distance == pytest.approx(2 * math.sqrt(3) / 5, abs=1e-4)

    def test_singular_model_matrix_is_a_miss(self):
        model = Matrix.scaling(Vector3(1, 1, 0))
        assert raycast_triangle(down_ray(0.2, 0.2), make_triangle(*RIGHT_TRIANGLE), model_matrix=model) is None

    def test_transform_order_scale_rotate_translate(self):
        transform = Transformation(Vector3(2, 1, 1), Vector3(0, 0, 90), Vector3(10, 0, 0))
        point = compute_model_matrix(transform).transform_point(Vector3(1, 0, 0))
        # (1,0,0) -> scale (2,0,0) -> rotate Z 90 (0,2,0) -> translate (10,2,0)
        assert (point.x, point.y, point.z) == pytest.approx((10, 2, 0), abs=1e-9)


def make_scene(*shapes, meshes=None) -> Scene:
    scene = Scene(Camera(x_res=2, y_res=2))
    for mesh_id, mesh in (meshes or {}).items():
        scene.add_mesh(mesh_id, mesh)
    for shape in shapes:
        scene.add_shape(shape)
    return scene


class TestWorld:

    def test_nearest_of_several_shapes(self):
        near = Material(Vector3(1, 0, 0))
        far = Material(Vector3(0, 0, 1))
        scene = make_scene(
            Shape("far", "quad", far, Transformation(translation=Vector3(0, 0, -5))),
            Shape("near", "quad", near, Transformation(translation=Vector3(0, 0, -1))),
            meshes={"quad": make_quad(0)},
        )
        world = World(scene)
        hit = world.hit(Ray(Vector3(0.3, 0.7, 2), Vector3(0, 0, -1)))
        assert hit.material is near
        assert hit.distance == pytest.approx(3.0, abs=1e-4)

    def test_one_mesh_many_instances(self):
        scene = make_scene(
            Shape("a", "quad", transforms=Transformation(translation=Vector3(0, 0, -1))),
            Shape("b", "quad", transforms=Transformation(translation=Vector3(0, 0, -2))),
            meshes={"quad": make_quad(0)},
        )
        world = World(scene)
        assert len(world.instances) == 2
        assert world.triangle_count() == 4
        # Baking must not touch the shared mesh
        assert scene.meshes["quad"].triangles[0].v0.position.z == 0

    def test_miss_returns_none(self):
        scene = make_scene(Shape("a", "quad"), meshes={"quad": make_quad(0, half=1)})
        assert World(scene).hit(Ray(Vector3(5, 5, 2), Vector3(0, 0, -1))) is None

    def test_unresolved_mesh_is_fatal(self):
        scene = make_scene(Shape("ghost", "missing"))
        with pytest.raises(SceneError, match="missing"):
            World(scene)

    def test_singular_shape_is_skipped(self):
        scene = make_scene(
            Shape("flat", "quad", transforms=Transformation(scale=Vector3(1, 1, 0))),
            Shape("ok", "quad", transforms=Transformation(translation=Vector3(0, 0, -4))),
            meshes={"quad": make_quad(0)},
        )
        world = World(scene)
        assert world.skipped == ["flat"]
        hit = world.hit(Ray(Vector3(0.3, 0.7, 2), Vector3(0, 0, -1)))
        assert hit.distance == pytest.approx(6.0, abs=1e-4)

    @pytest.mark.parametrize("verbose", [True, False])
    def test_singular_shape_warning_follows_verbose(self, verbose, capsys):
        scene = make_scene(
            Shape("flat", "quad", transforms=Transformation(scale=Vector3(0, 1, 1))),
            meshes={"quad": make_quad(0)},
        )
        World(scene, verbose=verbose)
        assert ("Warning" in capsys.readouterr().out) == verbose

    def test_occluded_respects_max_distance(self):
        scene = make_scene(Shape("wall", "quad"), meshes={"quad": make_quad(0)})
        world = World(scene)
        ray = Ray(Vector3(0.3, 0.7, 2), Vector3(0, 0, -1))
        assert world.occluded(ray)
        assert not world.occluded(ray, max_distance=1.5)
        assert not world.occluded(Ray(Vector3(0.3, 0.7, 2), Vector3(0, 0, 1)))

    def test_empty_mesh(self):
        scene = make_scene(Shape("empty", "none"), meshes={"none": Mesh()})
        assert World(scene).hit(Ray(Vector3(0, 0, 2), Vector3(0, 0, -1))) is None
