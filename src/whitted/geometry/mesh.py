# geometry/mesh.py
import json
from typing import List, Optional, Tuple
from whitted.core.vector import Vector2, Vector3
from whitted.core.matrix import Matrix
from whitted.errors import SceneError


class Vertex:
    """A mesh vertex: position, normal and texture coordinate."""
    def __init__(self, position: Vector3, normal: Optional[Vector3] = None,
                 texcoord: Optional[Vector2] = None):
        self.position = position
        self.normal = normal if normal is not None else Vector3()
        self.texcoord = texcoord if texcoord is not None else Vector2()

    def __repr__(self) -> str:
        return f"Vertex({self.position}, {self.normal}, {self.texcoord})"


class Triangle:
    """Represents a single triangle with per-vertex normals and UVs."""
    def __init__(self, v0: Vertex, v1: Vertex, v2: Vertex):
        self.v0 = v0
        self.v1 = v1
        self.v2 = v2

    def face_normal(self) -> Vector3:
        edge1 = self.v1.position - self.v0.position
        edge2 = self.v2.position - self.v0.position
        return edge1.cross(edge2).normalize()

    def interpolate_normal(self, u: float, v: float) -> Vector3:
        """Interpolate the normal at the given barycentric coordinates."""
        w = 1.0 - u - v
        return (self.v0.normal * w + self.v1.normal * u + self.v2.normal * v).normalize()

    def interpolate_texcoord(self, u: float, v: float) -> Vector2:
        w = 1.0 - u - v
        return self.v0.texcoord * w + self.v1.texcoord * u + self.v2.texcoord * v

    def transformed(self, model_matrix: Matrix, normal_matrix: Matrix) -> "Triangle":
        """
        A copy of this triangle moved into world space. Positions go through
        the model matrix, normals through its inverse-transpose.
        """
        return Triangle(*(
            Vertex(model_matrix.transform_point(vert.position),
                   normal_matrix.transform_direction(vert.normal).normalize(),
                   vert.texcoord)
            for vert in (self.v0, self.v1, self.v2)
        ))


class Mesh:
    """An ordered collection of triangles."""
    def __init__(self, triangles: Optional[List[Triangle]] = None):
        self.triangles = triangles if triangles is not None else []

    def __len__(self) -> int:
        return len(self.triangles)

    def __iter__(self):
        return iter(self.triangles)


def _fill_missing_normals(triangle: Triangle) -> Triangle:
    # Vertices without normals fall back to the geometric face normal
    verts = (triangle.v0, triangle.v1, triangle.v2)
    if any(vert.normal.length() == 0 for vert in verts):
        face_normal = triangle.face_normal()
        for vert in verts:
            if vert.normal.length() == 0:
                vert.normal = face_normal.copy()
    return triangle


def load_mesh_json(filename: str, verbose: bool = False) -> Mesh:
    """
    Load a triangle list stored as
    {"data": [{"v0": {"v": [x, y, z], "n": [x, y, z], "t": [u, v]}, "v1": ..., "v2": ...}]}.
    """
    if verbose:
        print(f"Opening file: {filename}")
    try:
        with open(filename, "r") as f:
            document = json.load(f)
    except FileNotFoundError:
        raise SceneError(f"Mesh file not found: {filename}")
    except json.JSONDecodeError as e:
        raise SceneError(f"Malformed mesh file {filename}: {e}")

    triangles: List[Triangle] = []
    for index, entry in enumerate(document.get("data", [])):
        try:
            verts = []
            for key in ("v0", "v1", "v2"):
                raw = entry[key]
                normal = Vector3.from_iterable(raw["n"]) if "n" in raw else None
                texcoord = Vector2(*raw["t"]) if "t" in raw else None
                verts.append(Vertex(Vector3.from_iterable(raw["v"]), normal, texcoord))
        except (KeyError, TypeError, ValueError) as e:
            raise SceneError(f"Malformed triangle {index} in {filename}: {e!r}")
        triangles.append(_fill_missing_normals(Triangle(*verts)))

    if verbose:
        print(f"Loaded {len(triangles)} triangles")
    return Mesh(triangles)


def load_obj(filename: str, verbose: bool = False) -> Mesh:
    """Load a Wavefront OBJ file, fan-triangulating polygonal faces."""
    positions: List[Vector3] = []
    normals: List[Vector3] = []
    uvs: List[Vector2] = []
    triangles: List[Triangle] = []

    if verbose:
        print(f"Opening file: {filename}")

    def get_vertex_data(vertex_str: str) -> Tuple[int, Optional[int], Optional[int]]:
        indices = vertex_str.split('/')
        v_idx = int(indices[0]) - 1  # OBJ indices are 1-based
        t_idx = int(indices[1]) - 1 if len(indices) > 1 and indices[1] else None
        n_idx = int(indices[2]) - 1 if len(indices) > 2 and indices[2] else None
        return v_idx, t_idx, n_idx

    def make_vertex(data) -> Vertex:
        v_idx, t_idx, n_idx = data
        return Vertex(
            positions[v_idx],
            normals[n_idx].copy() if n_idx is not None else None,
            uvs[t_idx] if t_idx is not None else None
        )

    try:
        f = open(filename, 'r')
    except FileNotFoundError:
        raise SceneError(f"Mesh file not found: {filename}")

    with f:
        for line_num, line in enumerate(f, 1):
            values = line.split()
            if not values or values[0].startswith('#'):
                continue
            try:
                if values[0] == 'v':
                    positions.append(Vector3(float(values[1]), float(values[2]), float(values[3])))
                elif values[0] == 'vn':
                    normals.append(Vector3(float(values[1]), float(values[2]), float(values[3])))
                elif values[0] == 'vt':
                    uvs.append(Vector2(float(values[1]), float(values[2])))
                elif values[0] == 'f':
                    vertex_data = [get_vertex_data(v) for v in values[1:]]
                    for i in range(1, len(vertex_data) - 1):
                        triangle = Triangle(make_vertex(vertex_data[0]),
                                            make_vertex(vertex_data[i]),
                                            make_vertex(vertex_data[i + 1]))
                        triangles.append(_fill_missing_normals(triangle))
            except (IndexError, ValueError) as e:
                raise SceneError(f"{filename}:{line_num}: cannot parse '{line.strip()}' ({e})")

    if verbose:
        print(f"Loaded {len(positions)} vertices, {len(normals)} normals, "
              f"{len(uvs)} UVs, {len(triangles)} triangles")
    return Mesh(triangles)
