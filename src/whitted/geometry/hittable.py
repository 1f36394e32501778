# geometry/hittable.py
from whitted.core.vector import Vector2, Vector3


class RaycastHitInfo:
    """
    Records details of a ray-triangle intersection. Everything is in world
    space.
    """
    def __init__(self, hit_point: Vector3 = None, normal: Vector3 = None,
                 distance: float = float("inf"), material=None,
                 u: float = 0.0, v: float = 0.0, texcoord: Vector2 = None):
        self.hit_point = hit_point  # Intersection point
        self.normal = normal        # Interpolated, normalized surface normal
        self.distance = distance    # Ray parameter at intersection
        self.material = material
        self.u = u                  # Barycentric weight of v1
        self.v = v                  # Barycentric weight of v2
        self.texcoord = texcoord if texcoord is not None else Vector2()

    def face_forward(self, direction: Vector3) -> bool:
        """
        Flips the normal so that it points against `direction`. Returns
        True if the ray hit the front face.
        """
        front_face = direction.dot(self.normal) < 0
        if not front_face:
            self.normal = -self.normal
        return front_face

    def __repr__(self) -> str:
        return (f"RaycastHitInfo(hit_point={self.hit_point}, normal={self.normal}, "
                f"distance={self.distance})")
