# scene/scene.py
from typing import Dict, List, Optional
from whitted.core.vector import Vector3
from whitted.camera.camera import Camera
from whitted.geometry.mesh import Mesh
from whitted.geometry.transform import Transformation
from whitted.materials.material import Material
from whitted.materials.textures import Texture
from whitted.errors import SceneError


class Light:
    """
    A light source. `direction` is the direction the light travels in.
    A light with a `position` is a point light and its direction is
    ignored; zero intensity means the light is absent.
    """
    def __init__(self, color: Vector3 = None, intensity: float = 0.0,
                 direction: Vector3 = None, position: Optional[Vector3] = None):
        self.color = color if color is not None else Vector3(1, 1, 1)
        self.intensity = intensity
        self.direction = direction if direction is not None else Vector3(0, 0, -1)
        self.position = position

    @property
    def is_point(self) -> bool:
        return self.position is not None

    def __repr__(self) -> str:
        kind = f"position={self.position}" if self.is_point else f"direction={self.direction}"
        return f"Light(color={self.color}, intensity={self.intensity}, {kind})"


class Shape:
    """One placed instance of a mesh, referenced by id."""
    def __init__(self, id: str, geometry_id: str, material: Material = None,
                 transforms: Transformation = None, notes: str = ""):
        self.id = id
        self.geometry_id = geometry_id
        self.material = material if material is not None else Material()
        self.transforms = transforms if transforms is not None else Transformation()
        self.notes = notes

    def __repr__(self) -> str:
        return f"Shape({self.id!r}, geometry={self.geometry_id!r})"


class Scene:
    """
    Everything a render needs. The scene owns its meshes and textures;
    shapes only name them. Treated as read-only once rendering starts.
    """
    def __init__(self, camera: Camera = None):
        self.shapes: List[Shape] = []
        self.meshes: Dict[str, Mesh] = {}
        self.textures: Dict[str, Texture] = {}
        self.camera = camera if camera is not None else Camera()
        self.lights: List[Light] = []
        self.directional = Light()
        self.ambient = Light()

    def add_mesh(self, mesh_id: str, mesh: Mesh):
        self.meshes[mesh_id] = mesh

    def add_shape(self, shape: Shape):
        self.shapes.append(shape)

    def add_light(self, light: Light):
        self.lights.append(light)

    def mesh_for(self, shape: Shape) -> Mesh:
        try:
            return self.meshes[shape.geometry_id]
        except KeyError:
            raise SceneError(f"Shape {shape.id!r} references unknown mesh {shape.geometry_id!r}")

    def validate(self):
        """
        Checks the scene can be rendered; raises SceneError otherwise.
        """
        self.camera.validate()
        for shape in self.shapes:
            self.mesh_for(shape)
            texture_id = shape.material.texture_id
            if texture_id and texture_id not in self.textures:
                raise SceneError(f"Shape {shape.id!r} references unknown texture {texture_id!r}")
