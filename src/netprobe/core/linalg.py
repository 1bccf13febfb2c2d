"""
Small dense linear algebra used by the local surrogate explainer.

The systems here are tiny (3x3 for a 2D surrogate), so the solver is a
straightforward Gaussian elimination rather than a LAPACK call. A zero pivot
never divides: the affected coefficient is set to 0.
"""

import numpy as np


def solve_linear_system(a: np.ndarray, b: np.ndarray) -> np.ndarray:
    """
    Solve ``a @ x = b`` by Gaussian elimination with partial pivoting.

    Args:
        a: Square coefficient matrix (n, n)
        b: Right-hand side (n,)

    Returns:
        Solution vector (n,). Coefficients whose pivot is exactly zero are 0.
    """
    a = np.asarray(a, dtype=float)
    b = np.asarray(b, dtype=float)
    n = a.shape[0]
    if n == 0:
        return np.zeros(0)

    aug = np.hstack([a, b.reshape(-1, 1)])

    # Forward elimination
    for i in range(n):
        max_row = i + int(np.argmax(np.abs(aug[i:, i])))
        if max_row != i:
            aug[[i, max_row]] = aug[[max_row, i]]

        pivot = aug[i, i]
        for k in range(i + 1, n):
            factor = aug[k, i] / pivot if pivot != 0 else 0.0
            aug[k, i:] -= factor * aug[i, i:]

    # Back substitution
    x = np.zeros(n)
    for i in range(n - 1, -1, -1):
        total = aug[i, n] - np.dot(aug[i, i + 1 : n], x[i + 1 :])
        pivot = aug[i, i]
        x[i] = total / pivot if pivot != 0 else 0.0

    return x


def weighted_least_squares(
    x: np.ndarray, y: np.ndarray, weights: np.ndarray
) -> np.ndarray:
    """
    Fit ``beta`` minimising ``sum(w * (y - x @ beta)**2)``.

    Solves the normal equations ``(XᵀWX) beta = XᵀWy``.

    Args:
        x: Design matrix (n_samples, n_params), intercept column included
        y: Targets (n_samples,)
        weights: Per-sample weights (n_samples,)

    Returns:
        Coefficients (n_params,)
    """
    x = np.asarray(x, dtype=float)
    y = np.asarray(y, dtype=float)
    weights = np.asarray(weights, dtype=float)

    if x.ndim != 2 or x.shape[0] == 0 or x.shape[1] == 0:
        return np.zeros(x.shape[1] if x.ndim == 2 else 0)

    weighted_x = x * weights[:, None]
    xtwx = x.T @ weighted_x
    xtwy = weighted_x.T @ y
    return solve_linear_system(xtwx, xtwy)


def weighted_r2(y_true: np.ndarray, y_pred: np.ndarray, weights: np.ndarray) -> float:
    """
    Weighted coefficient of determination.

    Uses the weighted mean of ``y_true`` as the baseline. Returns 0 for empty or
    constant targets, or when their weighted variance is zero. Never exceeds 1
    and can be negative.
    """
    y_true = np.asarray(y_true, dtype=float)
    y_pred = np.asarray(y_pred, dtype=float)
    weights = np.asarray(weights, dtype=float)
    if y_true.size == 0 or np.ptp(y_true) == 0:
        return 0.0

    sum_w = weights.sum()
    y_mean = float(np.dot(weights, y_true) / sum_w) if sum_w > 0 else 0.0

    ss_res = float(np.dot(weights, (y_true - y_pred) ** 2))
    ss_tot = float(np.dot(weights, (y_true - y_mean) ** 2))

    return 1.0 - ss_res / ss_tot if ss_tot > 0 else 0.0
