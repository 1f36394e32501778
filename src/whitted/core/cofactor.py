# core/cofactor.py
#
# Compiled cofactor kernels for 4x4 matrices. All inputs are float64 numpy
# arrays in row-major order.
import numpy as np
from numba import njit


@njit
def determinant3x3(m):
    """Determinant of the upper-left 3x3 block of m."""
    return (m[0, 0] * (m[1, 1] * m[2, 2] - m[1, 2] * m[2, 1]) -
            m[0, 1] * (m[1, 0] * m[2, 2] - m[1, 2] * m[2, 0]) +
            m[0, 2] * (m[1, 0] * m[2, 1] - m[1, 1] * m[2, 0]))


@njit
def minor3x3(m, row, col):
    """The 3x3 submatrix of the 4x4 m with `row` and `col` removed."""
    sub = np.empty((3, 3), dtype=np.float64)
    si = 0
    for i in range(4):
        if i == row:
            continue
        sj = 0
        for j in range(4):
            if j == col:
                continue
            sub[si, sj] = m[i, j]
            sj += 1
        si += 1
    return sub


@njit
def determinant4x4(m):
    # Cofactor expansion along the first row
    det = 0.0
    for i in range(4):
        sign = 1.0 if i % 2 == 0 else -1.0
        det += sign * m[0, i] * determinant3x3(minor3x3(m, 0, i))
    return det


@njit
def adjoint4x4(m):
    adj = np.empty((4, 4), dtype=np.float64)
    for i in range(4):
        for j in range(4):
            cofactor = determinant3x3(minor3x3(m, i, j))
            if (i + j) % 2 != 0:
                cofactor = -cofactor
            # Transposed cofactor matrix
            adj[j, i] = cofactor
    return adj
