from whitted.config import EPSILON, MAX_DEPTH, RenderSettings
from whitted.errors import SceneError
from whitted.core.vector import Vector2, Vector3
from whitted.core.matrix import Matrix
from whitted.core.ray import Ray
from whitted.camera.camera import Camera
from whitted.geometry.mesh import Mesh, Triangle, Vertex
from whitted.geometry.transform import Transformation
from whitted.materials.material import Material
from whitted.scene.scene import Light, Scene, Shape
from whitted.scene.loader import load_scene
from whitted.renderer.raytracer import Raytracer

__version__ = "0.1.0"
