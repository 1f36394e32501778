# camera/camera.py
from whitted.core.vector import Vector3
from whitted.core.matrix import Matrix
from whitted.core.ray import Ray
from whitted.core.utils import nearly_equals
from whitted.errors import SceneError


class Camera:
    """
    A pinhole camera looking from `from_point` toward `to_point`. The image
    plane sits at distance `near` and spans [left, right] x [bottom, top] in
    camera space; pixel (0, 0) is the top-left corner.
    """
    def __init__(self, from_point: Vector3 = None, to_point: Vector3 = None,
                 near: float = 1.0, far: float = 1000.0,
                 right: float = 0.5, left: float = -0.5,
                 top: float = 0.5, bottom: float = -0.5,
                 x_res: int = 256, y_res: int = 256):
        self.from_point = from_point if from_point is not None else Vector3(0, 0, 5)
        self.to_point = to_point if to_point is not None else Vector3(0, 0, 0)
        self.near = near
        self.far = far
        self.right = right
        self.left = left
        self.top = top
        self.bottom = bottom
        self.x_res = int(x_res)
        self.y_res = int(y_res)
        self.update_camera()

    def validate(self):
        if self.x_res <= 0 or self.y_res <= 0:
            raise SceneError(f"Camera resolution must be positive, got {self.x_res}x{self.y_res}")
        if self.near <= 0 or self.far <= self.near:
            raise SceneError(f"Invalid clip range near={self.near} far={self.far}")
        if self.right == self.left or self.top == self.bottom:
            raise SceneError("Camera image plane has zero extent")
        if (self.to_point - self.from_point).length() == 0:
            raise SceneError("Camera 'from' and 'to' points coincide")

    def update_camera(self):
        """Recomputes the view direction, view/projection matrices and basis."""
        forward = self.to_point - self.from_point
        if forward.length() == 0:
            # Caught by validate(); keep the matrices well formed meanwhile
            forward = Vector3(0, 0, -1)
        self.view_direction = forward.normalize()

        global_up = Vector3(0, 1, 0)
        if nearly_equals(abs(self.view_direction.dot(global_up)), 1.0):
            global_up = Vector3(0, 0, -1)
        self.right_axis = self.view_direction.cross(global_up).normalize()
        self.up_axis = self.right_axis.cross(self.view_direction).normalize()

        self.view_matrix = self._look_at()
        self.camera_to_world = self.view_matrix.inverse()
        self.projection_matrix = self._frustum()

    def _look_at(self) -> Matrix:
        r, u, f, eye = self.right_axis, self.up_axis, self.view_direction, self.from_point
        return Matrix([
            [r.x, r.y, r.z, -r.dot(eye)],
            [u.x, u.y, u.z, -u.dot(eye)],
            [-f.x, -f.y, -f.z, f.dot(eye)],
            [0, 0, 0, 1]
        ])

    def _frustum(self) -> Matrix:
        l, r, b, t, n, f = self.left, self.right, self.bottom, self.top, self.near, self.far
        width = (r - l) or 1.0
        height = (t - b) or 1.0
        depth = (f - n) or 1.0
        return Matrix([
            [2 * n / width, 0, (r + l) / width, 0],
            [0, 2 * n / height, (t + b) / height, 0],
            [0, 0, -(f + n) / depth, -2 * f * n / depth],
            [0, 0, -1, 0]
        ])

    def generate_ray(self, x: int, y: int) -> Ray:
        """Primary ray through the centre of pixel (x, y)."""
        px = self.left + (self.right - self.left) * (x + 0.5) / self.x_res
        py = self.top - (self.top - self.bottom) * (y + 0.5) / self.y_res
        direction = self.camera_to_world.transform_direction(Vector3(px, py, -self.near))
        return Ray(self.from_point, direction.normalize())
