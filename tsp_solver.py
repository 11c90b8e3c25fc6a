import logging
import math
from typing import List, NamedTuple, Optional, Sequence

logger = logging.getLogger(__name__)


# Held–Karp TSP (returns optimal cost and tour order starting at 0 and ending at 0)


class TSPError(Exception):
    """Base class for solver errors the caller is expected to report."""


class InvalidInputError(TSPError):
    pass


class NoSolutionError(TSPError):
    pass


class TourResult(NamedTuple):
    distance: float
    path: List[int]


def _edge(distance_matrix: Sequence[Sequence[float]], a: int, b: int) -> Optional[float]:
    # None or inf marks a missing edge
    cost = distance_matrix[a][b]
    if cost is None or cost == math.inf:
        return None
    return cost


def solve_tsp_held_karp(distance_matrix: Sequence[Sequence[float]]) -> TourResult:
    n = len(distance_matrix)
    if n == 0:
        raise InvalidInputError("Empty distance matrix")

    ALL_VISITED = (1 << n) - 1

    # dp[mask][pos]: cheapest cost of leaving 0, visiting exactly `mask`, standing at `pos`.
    # None means the state has not been reached.
    dp: List[List[Optional[float]]] = [[None] * n for _ in range(1 << n)]
    parent: List[List[Optional[int]]] = [[None] * n for _ in range(1 << n)]
    dp[1][0] = 0

    for mask in range(1 << n):
        if not mask & 1:
            continue
        for pos in range(n):
            if not mask & (1 << pos):
                continue
            cost = dp[mask][pos]
            if cost is None:
                continue
            for city in range(n):
                if mask & (1 << city):
                    continue
                edge = _edge(distance_matrix, pos, city)
                if edge is None:
                    continue
                new_mask = mask | (1 << city)
                candidate = cost + edge
                best = dp[new_mask][city]
                if best is None or candidate < best:
                    dp[new_mask][city] = candidate
                    parent[new_mask][city] = pos

    final_dist = None
    last_city = None
    for i in range(1, n):
        cost = dp[ALL_VISITED][i]
        if cost is None:
            continue
        edge = _edge(distance_matrix, i, 0)
        if edge is None:
            continue
        total = cost + edge
        if final_dist is None or total < final_dist:
            final_dist = total
            last_city = i

    if final_dist is None:
        raise NoSolutionError("No valid solution found")

    path = []
    mask = ALL_VISITED
    curr = last_city
    while curr is not None:
        path.append(curr)
        prev = parent[mask][curr]
        mask &= ~(1 << curr)
        curr = prev
    path.reverse()  # e.g., [0, 2, 3, 1]
    path.append(0)

    logger.debug(f"Held-Karp solved n={n}: distance={final_dist}, path={path}")
    return TourResult(distance=final_dist, path=path)


def tour_cost(distance_matrix: Sequence[Sequence[float]], path: Sequence[int]) -> float:
    return sum(distance_matrix[a][b] for a, b in zip(path[:-1], path[1:]))
