# geometry/world.py
from typing import List, Optional
from whitted.config import EPSILON
from whitted.core.ray import Ray
from whitted.geometry.hittable import RaycastHitInfo
from whitted.geometry.intersect import intersect_triangle, raycast_triangle
from whitted.geometry.mesh import Triangle
from whitted.geometry.transform import compute_model_matrix


class ShapeInstance:
    """A shape with its mesh already baked into world space."""
    def __init__(self, shape, triangles: List[Triangle]):
        self.shape = shape
        self.material = shape.material
        self.triangles = triangles


class World:
    """
    The renderable view of a Scene. Building it validates the scene,
    resolves every shape's mesh and moves its triangles to world space once,
    so that rays are tested against world-space geometry only.
    """
    def __init__(self, scene, epsilon: float = EPSILON, verbose: bool = False):
        scene.validate()
        self.epsilon = epsilon
        self.instances: List[ShapeInstance] = []
        self.skipped: List[str] = []

        for shape in scene.shapes:
            mesh = scene.mesh_for(shape)
            model_matrix = compute_model_matrix(shape.transforms)
            normal_matrix = model_matrix.inverse_and_transpose()
            if normal_matrix is None:
                # A singular transform renders the shape as absent
                if verbose:
                    print(f"Warning: shape {shape.id!r} has a singular transform, skipping it")
                self.skipped.append(shape.id)
                continue
            triangles = [triangle.transformed(model_matrix, normal_matrix) for triangle in mesh]
            self.instances.append(ShapeInstance(shape, triangles))

        if verbose:
            print(f"World contains {len(self.instances)} shapes, "
                  f"{self.triangle_count()} triangles")

    def triangle_count(self) -> int:
        return sum(len(instance.triangles) for instance in self.instances)

    def hit(self, ray: Ray, t_max: float = float("inf")) -> Optional[RaycastHitInfo]:
        """Closest hit over every triangle of every shape, or None."""
        hit_record = None
        closest_so_far = t_max
        for instance in self.instances:
            for triangle in instance.triangles:
                rec = raycast_triangle(ray, triangle, instance.material,
                                       t_max=closest_so_far, epsilon=self.epsilon)
                if rec is not None:
                    closest_so_far = rec.distance
                    hit_record = rec
        return hit_record

    def occluded(self, ray: Ray, max_distance: float = float("inf")) -> bool:
        """True as soon as any geometry lies along the ray before max_distance."""
        for instance in self.instances:
            for triangle in instance.triangles:
                result = intersect_triangle(ray, triangle.v0.position, triangle.v1.position,
                                            triangle.v2.position, self.epsilon)
                if result is not None and result[0] < max_distance:
                    return True
        return False
