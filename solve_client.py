import math
import os
from typing import List, Optional, Sequence

import requests

from tsp_solver import InvalidInputError, NoSolutionError, TourResult

DEFAULT_SERVER_URL = "http://localhost:5000"


def solve_remote(
    matrix: Sequence[Sequence[Optional[float]]],
    base_url: Optional[str] = None,
    timeout: float = 30,
) -> TourResult:
    """
    Solve a TSP instance on a running solver server (POST /solve).
    matrix: n x n costs; None or inf marks a missing edge
    Returns: TourResult with the optimal distance and the closed path
    """
    base_url = base_url or os.getenv("TSP_SERVER_URL", DEFAULT_SERVER_URL)
    url = f"{base_url.rstrip('/')}/solve"

    # JSON has no infinity, the server reads null as "no edge"
    rows: List[List[Optional[float]]] = [
        [None if value is None or value == math.inf else value for value in row]
        for row in matrix
    ]

    resp = requests.post(url, json={"matrix": rows}, timeout=timeout)
    if resp.status_code == 400:
        raise InvalidInputError(_error_message(resp))
    if resp.status_code == 422:
        raise NoSolutionError(_error_message(resp))
    resp.raise_for_status()
    data = resp.json()

    return TourResult(distance=data["distance"], path=list(data["path"]))


def _error_message(resp: requests.Response) -> str:
    try:
        return resp.json().get("error", resp.text)
    except ValueError:
        return resp.text
