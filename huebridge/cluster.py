"""Dominant colors of a palette by k-means clustering in OKLab.

Seeding is k-means++; the best of several runs (lowest within-cluster
variance) wins.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Sequence

import numpy as np

from huebridge import defaults

if TYPE_CHECKING:
    from huebridge.color import Color

logger = logging.getLogger(__name__)


def _seed_centroids(points: np.ndarray, k: int, rng: np.random.Generator) -> np.ndarray:
    """k-means++ seeding: each new centroid drawn with probability ~ D(x)^2."""
    n = len(points)
    chosen = [int(rng.integers(n))]
    while len(chosen) < k:
        d2 = ((points[:, None, :] - points[chosen][None, :, :]) ** 2).sum(axis=2).min(axis=1)
        d2[chosen] = 0.0
        total = d2.sum()
        if total == 0:
            raise ValueError(f"Palette has fewer than {k} distinct colors")
        chosen.append(int(rng.choice(n, p=d2 / total)))
    return points[chosen].copy()


def _kmeans(points: np.ndarray, centroids: np.ndarray, max_iterations: int) -> tuple[np.ndarray, float]:
    assignments = None
    for _ in range(max_iterations):
        d2 = ((points[:, None, :] - centroids[None, :, :]) ** 2).sum(axis=2)
        new_assignments = d2.argmin(axis=1)
        if assignments is not None and np.array_equal(new_assignments, assignments):
            break
        assignments = new_assignments
        for j in range(len(centroids)):
            members = points[assignments == j]
            # Empty clusters keep their previous centroid
            if len(members):
                centroids[j] = members.mean(axis=0)

    d2 = ((points[:, None, :] - centroids[None, :, :]) ** 2).sum(axis=2)
    variance = float(d2.min(axis=1).sum())
    return centroids, variance


def cluster(
    colors: Sequence[Color],
    k: int,
    runs: int = defaults.CLUSTER_RUNS,
    max_iterations: int = defaults.CLUSTER_MAX_ITERATIONS,
    seed: int | None = None,
) -> list[Color]:
    """Extract `k` dominant colors from a palette.

    Args:
        colors: Palette to cluster
        k: Number of clusters, 1 <= k <= len(colors)
        runs: Independent k-means++ restarts
        max_iterations: Iteration cap per run
        seed: Seed for reproducible centroids

    Returns:
        k opaque colors written in oklab

    Raises:
        ValueError: If k is out of range or the palette has fewer than k
            distinct colors
    """
    from huebridge.color import Color

    if not 1 <= k <= len(colors):
        raise ValueError(f"k must be between 1 and the palette size ({len(colors)}), got {k}")

    points = np.array([c.in_model("oklab").get_coords()[:3] for c in colors], dtype=float)
    rng = np.random.default_rng(seed)

    best, best_variance = None, np.inf
    for _ in range(runs):
        centroids, variance = _kmeans(points, _seed_centroids(points, k, rng), max_iterations)
        if variance < best_variance:
            best, best_variance = centroids, variance

    logger.debug("Clustered %d colors into %d, variance %.6f", len(colors), k, best_variance)
    return [Color.from_coords("oklab", (L, a, b, 1.0)) for L, a, b in best]
