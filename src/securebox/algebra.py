from __future__ import annotations

from typing import Optional, Tuple

import numpy as np


def _cross(y: int, x: int, r: int, c: int) -> np.ndarray:
    """Cells flipped once (net) by toggling pivot (r, c)."""
    mask = np.zeros((y, x), dtype=np.uint8)
    mask[r, :] = 1
    mask[:, c] = 1
    return mask


def build_toggle_matrix(y: int, x: int) -> np.ndarray:
    """Return the NxN effect matrix A over GF(2) for a y-by-x box, N = y*x.
    Column j encodes the cells toggled when pivoting at cell j (row-major).
    """
    N = y * x
    A = np.zeros((N, N), dtype=np.uint8)
    for r in range(y):
        for c in range(x):
            A[:, r * x + c] = _cross(y, x, r, c).reshape(-1)
    return A


def effect_of_presses(presses: np.ndarray) -> np.ndarray:
    """Net flip pattern of toggling every pivot set in ``presses``.

    Cell (i, j) lies in the cross of every pivot in row i and every pivot in
    column j; pivot (i, j) itself is counted by both, so it is added once
    more to restore its single flip.
    """
    P = np.asarray(presses, dtype=np.uint8) & 1
    row_par = P.sum(axis=1) % 2
    col_par = P.sum(axis=0) % 2
    return (row_par[:, None] ^ col_par[None, :] ^ P).astype(bool)


def build_reduced_system(state: np.ndarray) -> Tuple[np.ndarray, np.ndarray]:
    """Row/column parity system for a snapshot.

    Unknowns are R_0..R_{y-1} (parity of pivots in each row) followed by
    C_0..C_{x-1} (parity of pivots in each column). A plan unlocks ``state``
    iff P[i, j] = s[i, j] ^ R_i ^ C_j where

        (1 + x) R_i + sum(C) = S_i      one equation per row
        (1 + y) C_j + sum(R) = T_j      one equation per column
        sum(R) + sum(C) = 0             both count the same pivots

    with S_i, T_j the lock parities of row i and column j.
    """
    s = np.asarray(state, dtype=np.uint8) & 1
    y, x = s.shape
    n = y + x
    A = np.zeros((n + 1, n), dtype=np.uint8)
    b = np.zeros((n + 1,), dtype=np.uint8)

    A[:y, y:] = 1
    A[np.arange(y), np.arange(y)] ^= (1 + x) % 2
    b[:y] = s.sum(axis=1) % 2

    A[y:n, :y] = 1
    A[np.arange(y, n), np.arange(y, n)] ^= (1 + y) % 2
    b[y:n] = s.sum(axis=0) % 2

    A[n, :] = 1
    return A, b


def presses_from_parities(state: np.ndarray, parities: np.ndarray) -> np.ndarray:
    """Rebuild the pivot matrix from a solution of ``build_reduced_system``."""
    s = np.asarray(state, dtype=np.uint8) & 1
    y = s.shape[0]
    R = parities[:y].astype(np.uint8)
    C = parities[y:].astype(np.uint8)
    return (s ^ R[:, None] ^ C[None, :]).astype(bool)


def pack_augmented(A: np.ndarray, b: np.ndarray) -> np.ndarray:
    """Pack each row of [A|b] into uint8 words, big-endian bit order."""
    A = (np.asarray(A) % 2).astype(np.uint8)
    b = (np.asarray(b) % 2).astype(np.uint8).reshape(-1, 1)
    return np.packbits(np.concatenate([A, b], axis=1), axis=1)


def _column_bits(packed: np.ndarray, col: int, start: int) -> np.ndarray:
    return (packed[start:, col >> 3] >> (7 - (col & 7))) & 1


def gf2_eliminate(
    A: np.ndarray, b: np.ndarray
) -> Tuple[np.ndarray, list[int]]:
    """Forward Gaussian elimination of [A|b] over GF(2) on packed rows.

    Returns the packed row-echelon matrix and its pivot columns; row k of
    the result holds the pivot for ``pivcols[k]``.
    """
    m, n = np.asarray(A).shape
    M = pack_augmented(A, b)

    row = 0
    pivcols: list[int] = []
    for col in range(n):
        if row == m:
            break
        # find a pivot in/under current row
        candidates = np.flatnonzero(_column_bits(M, col, row))
        if len(candidates) == 0:
            continue
        pivot = row + int(candidates[0])
        if pivot != row:
            M[[row, pivot]] = M[[pivot, row]]
        # eliminate rows below; words left of col are zero in the pivot row
        below = row + 1 + np.flatnonzero(_column_bits(M, col, row + 1))
        if len(below):
            w = col >> 3
            M[below, w:] ^= M[row, w:]
        pivcols.append(col)
        row += 1
    return M, pivcols


def gf2_solve(
    A: np.ndarray, b: np.ndarray
) -> Tuple[Optional[np.ndarray], bool]:
    """Solve A x = b over GF(2) by elimination and back-substitution.

    Returns:
        x: one solution (length n, uint8, free variables set to 0) or None
        solvable: bool
    """
    n = np.asarray(A).shape[1]
    M, pivcols = gf2_eliminate(A, b)
    rank = len(pivcols)
    R = np.unpackbits(M, axis=1, count=n + 1)
    R_A = R[:, :n]
    R_b = R[:, n]

    # Inconsistency check: rows past the rank are 0...0 | r
    if np.any(R_b[rank:] == 1):
        return None, False

    x = np.zeros((n,), dtype=np.uint8)
    for ri in range(rank - 1, -1, -1):
        pc = pivcols[ri]
        rhs = int(R_b[ri])
        if pc + 1 < n:
            rhs ^= int(np.bitwise_and(R_A[ri, pc + 1 :], x[pc + 1 :]).sum() % 2)
        x[pc] = rhs
    return x, True
