# renderer/raytracer.py
import math
import multiprocessing as mp
import time
from typing import Optional, Tuple
import numpy as np
from whitted.config import RenderSettings
from whitted.core.vector import Vector3
from whitted.core.ray import Ray
from whitted.core.utils import mix_colors
from whitted.geometry.hittable import RaycastHitInfo
from whitted.geometry.world import World
from whitted.renderer.framebuffer import FrameBuffer


class Raytracer:
    """
    Whitted-style recursive ray tracer: Phong local shading with hard
    shadows, plus mirror reflection up to `settings.max_depth` bounces.
    """
    def __init__(self, scene, settings: Optional[RenderSettings] = None):
        self.settings = settings if settings is not None else RenderSettings()
        self.scene = scene
        self.max_depth = self.settings.max_depth
        self.epsilon = self.settings.epsilon
        self.background = Vector3.from_iterable(self.settings.background)
        self.verbose = self.settings.verbose

        if self.verbose:
            print("\n=== Preparing World ===")
        # Validates the scene; a SceneError here means nothing gets rendered
        self.world = World(scene, epsilon=self.epsilon, verbose=self.verbose)
        self.lights = [light for light in [scene.directional] + scene.lights
                       if light.intensity > 0]
        self.display = FrameBuffer(scene.camera.x_res, scene.camera.y_res)

    def raycast(self, ray: Ray, depth: int = 0) -> Tuple[Optional[RaycastHitInfo], Vector3]:
        """
        Traces `ray` into the scene. Returns the hit (None on a miss) and
        the shaded color, which is the background color on a miss.
        """
        hit = self.world.hit(ray)
        if hit is None:
            return None, self.background.copy()

        hit.face_forward(ray.direction)
        color = self.shade(ray, hit)

        material = hit.material
        if material.reflective and depth < self.max_depth:
            reflected_dir = Vector3.reflect(ray.direction, hit.normal).normalize()
            reflected_ray = Ray(hit.hit_point + hit.normal * self.epsilon, reflected_dir)
            _, reflected_color = self.raycast(reflected_ray, depth + 1)
            color = mix_colors(color, reflected_color, material.reflection_strength)

        return hit, color

    def surface_color(self, hit: RaycastHitInfo) -> Vector3:
        texture_id = hit.material.texture_id
        if texture_id:
            return self.scene.textures[texture_id].sample(hit.texcoord)
        return hit.material.surface_color

    def light_direction(self, light, point: Vector3) -> Tuple[Vector3, float]:
        """Unit vector from `point` toward the light, and the distance to it."""
        if light.is_point:
            to_light = light.position - point
            return to_light.normalized(), to_light.length()
        return (-light.direction).normalize(), math.inf

    def shade(self, ray: Ray, hit: RaycastHitInfo) -> Vector3:
        """
        Local illumination at a hit whose normal already faces the ray:
        ambient + per-light diffuse and Phong specular, skipping lights
        that are blocked by other geometry.
        """
        material = hit.material
        normal = hit.normal
        base = self.surface_color(hit)

        ambient = self.scene.ambient
        color = base * ambient.color * (material.ka * ambient.intensity)

        view_dir = -ray.direction
        shadow_origin = hit.hit_point + normal * self.epsilon

        for light in self.lights:
            to_light, distance = self.light_direction(light, hit.hit_point)
            n_dot_l = normal.dot(to_light)
            if n_dot_l <= 0:
                continue
            if self.world.occluded(Ray(shadow_origin, to_light), distance):
                continue

            radiance = light.color * light.intensity
            color = color + base * radiance * (material.kd * n_dot_l)

            reflect_dir = Vector3.reflect(-to_light, normal)
            r_dot_v = max(0.0, reflect_dir.dot(view_dir))
            if r_dot_v > 0 and material.ks > 0:
                color = color + radiance * (material.ks * r_dot_v ** material.specular_exponent)

        return color

    def render_rows(self, y_start: int, y_end: int) -> np.ndarray:
        """Float colors for rows [y_start, y_end), shaped (rows, width, 3)."""
        camera = self.scene.camera
        colors = np.zeros((y_end - y_start, camera.x_res, 3), dtype=np.float64)
        for y in range(y_start, y_end):
            for x in range(camera.x_res):
                _, color = self.raycast(camera.generate_ray(x, y))
                colors[y - y_start, x] = (color.x, color.y, color.z)
        return colors

    def render(self) -> FrameBuffer:
        """Renders one ray per pixel into the frame buffer and returns it."""
        camera = self.scene.camera
        width, height = camera.x_res, camera.y_res
        workers = self.settings.workers
        start_time = time.time()

        if self.verbose:
            print("\n=== Rendering ===")
            print(f"Resolution: {width}x{height}, max depth: {self.max_depth}, "
                  f"lights: {len(self.lights)}, workers: {workers}")

        if workers > 1:
            self._render_parallel(workers)
        else:
            report_every = max(1, height // 10)
            for y in range(height):
                self.display.set_rows(y, self.render_rows(y, y + 1))
                if self.verbose and ((y + 1) % report_every == 0 or y + 1 == height):
                    print(f"Row {y + 1}/{height} ({(y + 1) / height * 100:.1f}%)")

        if self.verbose:
            print(f"Rendering complete in {time.time() - start_time:.1f}s")
        return self.display

    def _render_parallel(self, workers: int):
        height = self.scene.camera.y_res
        rows_per_chunk = max(1, height // (workers * 4))  # 4 chunks per worker for load balancing
        chunks = [(y, min(y + rows_per_chunk, height)) for y in range(0, height, rows_per_chunk)]
        if self.verbose:
            print(f"Divided into {len(chunks)} chunks of ~{rows_per_chunk} rows each")

        with mp.Pool(workers, initializer=_init_worker, initargs=(self,)) as pool:
            # Chunks cover disjoint rows, so writes never overlap
            for y_start, colors in pool.imap_unordered(_render_row_chunk, chunks):
                self.display.set_rows(y_start, colors)


_worker_tracer = None


def _init_worker(tracer: Raytracer):
    global _worker_tracer
    _worker_tracer = tracer


def _render_row_chunk(bounds):
    y_start, y_end = bounds
    return y_start, _worker_tracer.render_rows(y_start, y_end)
