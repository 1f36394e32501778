# geometry/transform.py
from whitted.core.vector import Vector3
from whitted.core.matrix import Matrix


class Transformation:
    """
    Scale, per-axis rotation in degrees and translation of a shape
    instance.
    """
    def __init__(self, scale: Vector3 = None, rotation: Vector3 = None,
                 translation: Vector3 = None):
        self.scale = scale if scale is not None else Vector3(1, 1, 1)
        self.rotation = rotation if rotation is not None else Vector3()
        self.translation = translation if translation is not None else Vector3()

    def __repr__(self) -> str:
        return (f"Transformation(scale={self.scale}, rotation={self.rotation}, "
                f"translation={self.translation})")


def compute_model_matrix(transform: Transformation) -> Matrix:
    """
    Object-to-world matrix. Applied to a point: scale, then rotate about
    X, then Y, then Z, then translate, i.e. M = T * Rz * Ry * Rx * S.
    Normals must use M.inverse_and_transpose() of this same matrix.
    """
    return (Matrix.translation(transform.translation)
            * Matrix.rotation_z(transform.rotation.z)
            * Matrix.rotation_y(transform.rotation.y)
            * Matrix.rotation_x(transform.rotation.x)
            * Matrix.scaling(transform.scale))
