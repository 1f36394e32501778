# geometry/intersect.py
from typing import Optional, Tuple
from whitted.config import EPSILON
from whitted.core.vector import Vector3
from whitted.core.matrix import Matrix
from whitted.core.ray import Ray
from whitted.geometry.mesh import Triangle
from whitted.geometry.hittable import RaycastHitInfo


def intersect_triangle(ray: Ray, p0: Vector3, p1: Vector3, p2: Vector3,
                       epsilon: float = EPSILON) -> Optional[Tuple[float, float, float]]:
    """
    Möller–Trumbore ray/triangle test against world-space positions.
    Returns (t, u, v) with u, v the barycentric weights of p1 and p2, or
    None. Both faces are hittable.
    """
    edge1 = p1 - p0
    edge2 = p2 - p0
    h = ray.direction.cross(edge2)
    a = edge1.dot(h)

    # Ray parallel to the triangle plane, or a degenerate triangle
    if abs(a) < epsilon:
        return None

    f = 1.0 / a
    s = ray.origin - p0
    u = f * s.dot(h)
    if u < 0.0 or u > 1.0:
        return None

    q = s.cross(edge1)
    v = f * ray.direction.dot(q)
    if v < 0.0 or u + v > 1.0:
        return None

    t = f * edge2.dot(q)
    if t <= epsilon:
        return None
    return t, u, v


def raycast_triangle(ray: Ray, triangle: Triangle, material=None,
                     model_matrix: Optional[Matrix] = None,
                     normal_matrix: Optional[Matrix] = None,
                     t_max: float = float("inf"),
                     epsilon: float = EPSILON) -> Optional[RaycastHitInfo]:
    """
    Intersect a ray with one triangle of a shape.

    With a model matrix the triangle is taken to be in object space: its
    positions are moved to world space by `model_matrix` and its normals by
    `normal_matrix` (the inverse-transpose, derived here when not given).
    A singular model matrix counts as a miss. Without a model matrix the
    triangle is already in world space.

    Only hits strictly closer than `t_max` are reported.
    """
    if model_matrix is not None:
        if normal_matrix is None:
            normal_matrix = model_matrix.inverse_and_transpose()
            if normal_matrix is None:
                return None
        triangle = triangle.transformed(model_matrix, normal_matrix)

    result = intersect_triangle(ray, triangle.v0.position, triangle.v1.position,
                                triangle.v2.position, epsilon)
    if result is None:
        return None
    t, u, v = result
    if t >= t_max:
        return None

    return RaycastHitInfo(
        hit_point=ray.at(t),
        normal=triangle.interpolate_normal(u, v),
        distance=t,
        material=material,
        u=u,
        v=v,
        texcoord=triangle.interpolate_texcoord(u, v)
    )
