import logging
import math
import os
from typing import List, Optional

from flask import Flask, jsonify, render_template, request
from dotenv import load_dotenv

from tsp_solver import InvalidInputError, NoSolutionError, solve_tsp_held_karp, tour_cost

load_dotenv()

logger = logging.getLogger(__name__)

app = Flask(__name__)

MIN_NODES = 3
MAX_NODES = int(os.getenv("TSP_MAX_NODES", "16"))


def parse_matrix(payload) -> List[List[Optional[float]]]:
    matrix = payload.get("matrix") if isinstance(payload, dict) else None
    if not matrix or not isinstance(matrix, list):
        raise ValueError("Invalid input: matrix must be provided and must be an array")
    n = len(matrix)
    if n < MIN_NODES:
        raise ValueError("Need at least 3 locations")
    if n > MAX_NODES:
        raise ValueError(f"Please limit to {MAX_NODES} locations.")
    for row in matrix:
        if not isinstance(row, list) or len(row) != n:
            raise ValueError("Invalid matrix format: must be a square matrix")
    for i, row in enumerate(matrix):
        for j, value in enumerate(row):
            if value is None:
                # null = no edge between i and j
                continue
            if isinstance(value, bool) or not isinstance(value, (int, float)) or not math.isfinite(value):
                raise ValueError(f"Invalid matrix entry at [{i}][{j}]: must be a finite number or null")
    return matrix


def error_response(message: str, status: int):
    return jsonify({"error": message}), status


@app.route("/", methods=["GET"])
def index():
    return render_template("index.html", max_nodes=MAX_NODES)


@app.route("/solve", methods=["POST"])
def solve():
    payload = request.get_json(silent=True)
    try:
        matrix = parse_matrix(payload)
    except ValueError as e:
        logger.warning(f"Rejected /solve request: {e}")
        return error_response(str(e), 400)

    logger.info(f"Solving TSP for {len(matrix)} locations")
    try:
        result = solve_tsp_held_karp(matrix)
    except InvalidInputError as e:
        logger.warning(f"Invalid input: {e}")
        return error_response(str(e), 400)
    except NoSolutionError as e:
        logger.warning(f"No tour found: {e}")
        return error_response(str(e), 422)
    except Exception as e:
        logger.exception("TSP solver failed")
        return error_response(f"Internal server error: {e}", 500)

    logger.debug(f"Path cost check: {tour_cost(matrix, result.path)} vs {result.distance}")
    logger.info(f"Computed tour: distance={result.distance}, path={result.path}")
    return jsonify({"distance": result.distance, "path": result.path})


if __name__ == "__main__":
    logging.basicConfig(
        level=os.getenv("LOG_LEVEL", "INFO"),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    app.run(
        host=os.getenv("TSP_HOST", "127.0.0.1"),
        port=int(os.getenv("TSP_PORT", "5000")),
        debug=os.getenv("TSP_DEBUG", "1") == "1",
    )
