# core/matrix.py
import math
from typing import Optional
import numpy as np
from whitted.config import SINGULAR_EPSILON
from whitted.core.vector import Vector3
from whitted.core.cofactor import determinant3x3, determinant4x4, adjoint4x4


class Matrix:
    """
    A 4x4 row-major homogeneous matrix. Points are column vectors, so
    `a * b` applied to a point transforms by `b` first, then by `a`.
    """
    def __init__(self, values=None):
        if values is None:
            self.m = np.zeros((4, 4), dtype=np.float64)
        else:
            self.m = np.array(values, dtype=np.float64).reshape(4, 4)

    @classmethod
    def identity(cls) -> "Matrix":
        return cls(np.identity(4))

    @classmethod
    def scaling(cls, s: Vector3) -> "Matrix":
        return cls(np.diag([s.x, s.y, s.z, 1.0]))

    @classmethod
    def translation(cls, t: Vector3) -> "Matrix":
        result = cls.identity()
        result.m[0, 3] = t.x
        result.m[1, 3] = t.y
        result.m[2, 3] = t.z
        return result

    @classmethod
    def rotation_x(cls, degrees: float) -> "Matrix":
        c, s = math.cos(math.radians(degrees)), math.sin(math.radians(degrees))
        return cls([[1, 0, 0, 0],
                    [0, c, -s, 0],
                    [0, s, c, 0],
                    [0, 0, 0, 1]])

    @classmethod
    def rotation_y(cls, degrees: float) -> "Matrix":
        c, s = math.cos(math.radians(degrees)), math.sin(math.radians(degrees))
        return cls([[c, 0, s, 0],
                    [0, 1, 0, 0],
                    [-s, 0, c, 0],
                    [0, 0, 0, 1]])

    @classmethod
    def rotation_z(cls, degrees: float) -> "Matrix":
        c, s = math.cos(math.radians(degrees)), math.sin(math.radians(degrees))
        return cls([[c, -s, 0, 0],
                    [s, c, 0, 0],
                    [0, 0, 1, 0],
                    [0, 0, 0, 1]])

    def __getitem__(self, index):
        return self.m[index]

    def __mul__(self, other: "Matrix") -> "Matrix":
        return Matrix(self.m @ other.m)

    def __add__(self, other: "Matrix") -> "Matrix":
        return Matrix(self.m + other.m)

    def __sub__(self, other: "Matrix") -> "Matrix":
        return Matrix(self.m - other.m)

    def transpose(self) -> "Matrix":
        return Matrix(self.m.T)

    def transform_point(self, p: Vector3) -> Vector3:
        """Transforms a point, w = 1 implied. No perspective divide."""
        m = self.m
        return Vector3(
            m[0, 0] * p.x + m[0, 1] * p.y + m[0, 2] * p.z + m[0, 3],
            m[1, 0] * p.x + m[1, 1] * p.y + m[1, 2] * p.z + m[1, 3],
            m[2, 0] * p.x + m[2, 1] * p.y + m[2, 2] * p.z + m[2, 3]
        )

    def transform_direction(self, d: Vector3) -> Vector3:
        """Transforms a direction or normal by the upper 3x3 only (w = 0)."""
        m = self.m
        return Vector3(
            m[0, 0] * d.x + m[0, 1] * d.y + m[0, 2] * d.z,
            m[1, 0] * d.x + m[1, 1] * d.y + m[1, 2] * d.z,
            m[2, 0] * d.x + m[2, 1] * d.y + m[2, 2] * d.z
        )

    def determinant3x3(self) -> float:
        return float(determinant3x3(self.m))

    def determinant(self) -> float:
        return float(determinant4x4(self.m))

    def adjoint(self) -> "Matrix":
        return Matrix(adjoint4x4(self.m))

    def inverse(self) -> Optional["Matrix"]:
        """
        Adjoint / determinant inverse. Returns None for a singular matrix.
        """
        det = self.determinant()
        if abs(det) < SINGULAR_EPSILON:
            return None
        return Matrix(adjoint4x4(self.m) / det)

    def inverse_and_transpose(self) -> Optional["Matrix"]:
        """
        The normal matrix: the upper 3x3 of the inverse, transposed. The
        inverse's translation row and column are copied through as-is and
        the homogeneous corner is pinned to 1. Returns None for a singular
        matrix; the result must then not be used on normals.
        """
        inv = self.inverse()
        if inv is None:
            return None
        result = Matrix(inv.m)
        result.m[:3, :3] = inv.m[:3, :3].T
        result.m[3, 3] = 1.0
        return result

    def almost_equal(self, other: "Matrix", tol: float = 1e-6) -> bool:
        return bool(np.allclose(self.m, other.m, atol=tol))

    def __repr__(self) -> str:
        rows = ", ".join(str(list(row)) for row in self.m)
        return f"Matrix([{rows}])"
