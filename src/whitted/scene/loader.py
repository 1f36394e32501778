# scene/loader.py
import json
import os
from typing import Optional
from whitted.config import ASSETS_PATH
from whitted.core.vector import Vector3
from whitted.camera.camera import Camera
from whitted.geometry.mesh import Mesh, load_mesh_json, load_obj
from whitted.geometry.transform import Transformation
from whitted.materials.material import Material
from whitted.materials.textures import CheckerTexture, ImageTexture, Texture
from whitted.scene.scene import Light, Scene, Shape
from whitted.errors import SceneError

MESH_LOADERS = {
    ".json": load_mesh_json,
    ".obj": load_obj,
}


def _vec3(value, field: str, default: Optional[Vector3] = None) -> Vector3:
    if value is None:
        if default is None:
            raise SceneError(f"Missing required vector '{field}'")
        return default.copy()
    try:
        return Vector3.from_iterable(value)
    except (TypeError, ValueError):
        raise SceneError(f"'{field}' must be a list of 3 numbers, got {value!r}")


def _number(value, field: str, default: float) -> float:
    if value is None:
        return default
    if isinstance(value, bool):
        raise SceneError(f"'{field}' must be a number, got {value!r}")
    try:
        return float(value)
    except (TypeError, ValueError):
        raise SceneError(f"'{field}' must be a number, got {value!r}")


_JSON_NAMES = {dict: "object", list: "array", str: "string", bool: "boolean"}


def _expect(value, kind, field: str):
    """Returns `value` when it is a JSON `kind` (dict, list, str or bool)."""
    if not isinstance(value, kind):
        raise SceneError(f"'{field}' must be a JSON {_JSON_NAMES[kind]}, got {value!r}")
    return value


def resolve_mesh_path(geometry_id: str, assets_dir: str) -> str:
    """
    Finds the file holding a mesh id: the id itself when it names an
    existing file, else <assets_dir>/<id>.json or <assets_dir>/<id>.obj.
    """
    candidates = []
    if os.path.splitext(geometry_id)[1].lower() in MESH_LOADERS:
        candidates.append(os.path.join(assets_dir, geometry_id))
    candidates.extend(os.path.join(assets_dir, geometry_id + ext) for ext in MESH_LOADERS)
    for path in candidates:
        if os.path.isfile(path):
            return path
    raise SceneError(f"Mesh {geometry_id!r} not found in {assets_dir!r}")


def load_mesh(geometry_id: str, assets_dir: str = ASSETS_PATH, verbose: bool = False) -> Mesh:
    path = resolve_mesh_path(geometry_id, assets_dir)
    loader = MESH_LOADERS[os.path.splitext(path)[1].lower()]
    return loader(path, verbose=verbose)


def parse_material(data: dict) -> Material:
    _expect(data, dict, "material")
    texture_id = data.get("texture") or None
    if texture_id is not None:
        _expect(texture_id, str, "texture")
    return Material(
        surface_color=_vec3(data.get("Cs"), "Cs", Vector3(1, 1, 1)),
        ka=_number(data.get("Ka"), "Ka", 0.1),
        kd=_number(data.get("Kd"), "Kd", 0.7),
        ks=_number(data.get("Ks"), "Ks", 0.2),
        kt=_number(data.get("Kt"), "Kt", 0.0),
        specular_exponent=_number(data.get("n"), "n", 16.0),
        texture_id=texture_id,
        reflective=_expect(data.get("reflective", False), bool, "reflective"),
        reflection_strength=_number(data.get("reflectionStrength"), "reflectionStrength", 0.0),
    )


def parse_transforms(entries) -> Transformation:
    """
    Reads [{"S": [..]}, {"Rx": deg}, {"Ry": deg}, {"Rz": deg}, {"T": [..]}].
    The list order does not matter; the model matrix always applies scale,
    rotation, then translation.
    """
    transform = Transformation()
    for index, entry in enumerate(_expect(entries or [], list, "transforms")):
        for key, value in _expect(entry, dict, f"transforms[{index}]").items():
            if key == "S":
                transform.scale = _vec3(value, "S")
            elif key == "T":
                transform.translation = _vec3(value, "T")
            elif key in ("Rx", "Ry", "Rz"):
                angle = _number(value, key, 0.0)
                axis = key[1].lower()
                setattr(transform.rotation, axis, getattr(transform.rotation, axis) + angle)
            else:
                raise SceneError(f"Unknown transform '{key}'")
    return transform


def parse_camera(data: dict) -> Camera:
    _expect(data, dict, "camera")
    bounds = data.get("bounds", [1.0, 1000.0, 0.5, -0.5, 0.5, -0.5])
    resolution = data.get("resolution", [256, 256])
    try:
        near, far, right, left, top, bottom = (float(b) for b in bounds)
        x_res, y_res = (int(r) for r in resolution)
    except (TypeError, ValueError):
        raise SceneError(f"Malformed camera bounds {bounds!r} or resolution {resolution!r}")
    return Camera(
        from_point=_vec3(data.get("from"), "camera.from", Vector3(0, 0, 5)),
        to_point=_vec3(data.get("to"), "camera.to", Vector3(0, 0, 0)),
        near=near, far=far, right=right, left=left, top=top, bottom=bottom,
        x_res=x_res, y_res=y_res,
    )


def parse_light(data: dict) -> Light:
    _expect(data, dict, "light")
    light_type = data.get("type", "directional")
    light = Light(
        color=_vec3(data.get("color"), "light.color", Vector3(1, 1, 1)),
        intensity=_number(data.get("intensity"), "light.intensity", 1.0),
    )
    if light_type == "point":
        light.position = _vec3(data.get("from"), "light.from")
    elif light_type == "directional":
        direction = (_vec3(data.get("to"), "light.to", Vector3(0, 0, 0))
                     - _vec3(data.get("from"), "light.from", Vector3(0, 0, 1)))
        if direction.length() == 0:
            raise SceneError("Directional light 'from' and 'to' coincide")
        light.direction = direction.normalize()
    elif light_type != "ambient":
        raise SceneError(f"Unknown light type {light_type!r}")
    return light


def parse_texture(texture_id: str, data, assets_dir: str) -> Texture:
    if isinstance(data, str):
        data = {"type": "image", "path": data}
    _expect(data, dict, f"textures.{texture_id}")
    texture_type = data.get("type", "image")
    if texture_type == "image":
        path = _expect(data.get("path", texture_id), str, "path")
        return ImageTexture(os.path.join(assets_dir, path))
    if texture_type == "checker":
        colors = _expect(data.get("colors", [[1, 1, 1], [0, 0, 0]]), list, "colors")
        if len(colors) != 2:
            raise SceneError(f"Checker texture {texture_id!r} needs exactly 2 colors")
        return CheckerTexture(_vec3(colors[0], "colors[0]"), _vec3(colors[1], "colors[1]"),
                              _number(data.get("scale"), "scale", 8.0))
    raise SceneError(f"Unknown texture type {texture_type!r} for {texture_id!r}")


def build_scene(document: dict, assets_dir: str = ASSETS_PATH, verbose: bool = True) -> Scene:
    """Builds and validates a Scene from an already-parsed scene document."""
    _expect(document, dict, "document")
    data = _expect(document.get("scene", document), dict, "scene")
    scene = Scene(parse_camera(data.get("camera", {})))

    for texture_id, texture_data in _expect(data.get("textures") or {}, dict, "textures").items():
        scene.textures[texture_id] = parse_texture(texture_id, texture_data, assets_dir)

    for index, shape_data in enumerate(_expect(data.get("shapes") or [], list, "shapes")):
        _expect(shape_data, dict, f"shapes[{index}]")
        if "geometry" not in shape_data:
            raise SceneError(f"Shape {index} has no 'geometry'")
        geometry_id = _expect(shape_data["geometry"], str, f"shapes[{index}].geometry")
        shape = Shape(
            id=shape_data.get("id", f"shape{index}"),
            geometry_id=geometry_id,
            material=parse_material(shape_data.get("material", {})),
            transforms=parse_transforms(shape_data.get("transforms")),
            notes=shape_data.get("notes", ""),
        )
        if geometry_id not in scene.meshes:
            scene.add_mesh(geometry_id, load_mesh(geometry_id, assets_dir, verbose))
        texture_id = shape.material.texture_id
        if texture_id and texture_id not in scene.textures:
            # Bare texture ids are image files in the assets directory
            scene.textures[texture_id] = ImageTexture(os.path.join(assets_dir, texture_id))
        scene.add_shape(shape)

    have_ambient = have_directional = False
    for light_data in _expect(data.get("lights") or [], list, "lights"):
        light = parse_light(light_data)
        light_type = light_data.get("type", "directional")
        if light_type == "ambient":
            if not have_ambient:
                scene.ambient = light
                have_ambient = True
            elif verbose:
                print("Warning: extra ambient light ignored")
        elif light_type == "directional" and not have_directional:
            scene.directional = light
            have_directional = True
        else:
            scene.add_light(light)

    scene.validate()
    if verbose:
        print(f"Scene loaded: {len(scene.shapes)} shapes, {len(scene.meshes)} meshes, "
              f"{len(scene.lights) + have_directional} lights")
    return scene


def load_scene(scene_path: str, assets_dir: str = ASSETS_PATH, verbose: bool = True) -> Scene:
    """
    Loads a JSON scene file and every mesh and texture it names. Raises
    SceneError on anything that would make the render meaningless.
    """
    if verbose:
        print("\n=== Loading Scene ===")
        print(f"Opening file: {scene_path}")
    try:
        with open(scene_path, "r") as f:
            document = json.load(f)
    except FileNotFoundError:
        raise SceneError(f"Scene file not found: {scene_path}")
    except json.JSONDecodeError as e:
        raise SceneError(f"Malformed scene file {scene_path}: {e}")
    if not isinstance(document, dict):
        raise SceneError(f"Scene file {scene_path} must hold a JSON object")
    return build_scene(document, assets_dir, verbose)
