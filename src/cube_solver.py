"""
cube_solver.py — adapter around the Kociemba two-phase solver
=============================================================

The detection pipeline hands over a validated 54-letter face string
(U, R, F, D, L, B order) and gets back either a move sequence or a structured
failure. The move sequence is treated as opaque text.

### Failure kinds (`SolveFailure`)

* `INVALID_FACE_STRING`: wrong length, unexpected letters or wrong counts.
* `INVALID_CUBE_STATE`: the letters are fine but the cube cannot exist
  (misplaced centers, twisted corner, flipped edge, parity).
* `NO_SOLUTION`: the engine raised or returned nothing.

Failures are returned, never raised, and are not retried by callers.

### Caching & threading

Results (successful or not) are cached per face string behind a lock, so
re-detecting the same cube is free. `solve_async` submits to a module-level
single-worker executor and returns a `Future[SolveResult]`.

--------------------------------------------------------------------------

Copyright (c) 2025 Facundo Gauna & Ulises Carnevale. Licensed under MIT License.
"""

from __future__ import annotations

import concurrent.futures
import logging
import threading
from typing import Callable, Dict, Optional

import kociemba

from app_types import SolveFailure, SolveResult
from config import FACES_INIT_STATE
from validator import validate, verify_structure

logger = logging.getLogger(__name__)
logger.addHandler(logging.NullHandler())

# Thread pool for asynchronous solves (single worker: the engine is CPU bound)
_EXECUTOR = concurrent.futures.ThreadPoolExecutor(max_workers=1, thread_name_prefix="solver")


class CubeSolver:
    def __init__(self, engine: Optional[Callable[[str], str]] = None):
        self._engine = engine or kociemba.solve
        self._solve_cache: Dict[str, SolveResult] = {}
        self._lock = threading.Lock()

    def _run_engine(self, facelets: str) -> SolveResult:
        if facelets == FACES_INIT_STATE:
            return SolveResult(ok=True, solution="", message="Cube already solved")
        try:
            sol = self._engine(facelets)
        except Exception as e:
            logger.exception("Solver exception: %s", e)
            return SolveResult(ok=False, failure=SolveFailure.NO_SOLUTION, message=str(e))
        if not sol or not sol.strip():
            return SolveResult(ok=False, failure=SolveFailure.NO_SOLUTION,
                               message="kociemba returned no solution")
        return SolveResult(ok=True, solution=sol.strip(), message="Solved")

    def solve(self, facelets: str) -> SolveResult:
        if not isinstance(facelets, str):
            return SolveResult(ok=False, failure=SolveFailure.INVALID_FACE_STRING,
                               message="facelets must be a string")

        with self._lock:
            cached = self._solve_cache.get(facelets)
        if cached is not None:
            logger.debug("Solver cache hit for %s", facelets)
            return cached

        report = validate(facelets)
        if not report:
            result = SolveResult(ok=False, failure=SolveFailure.INVALID_FACE_STRING,
                                 message=f"Invalid face string ({len(facelets)} chars, {report.summary()})")
        else:
            ok, msg = verify_structure(facelets)
            if not ok:
                result = SolveResult(ok=False, failure=SolveFailure.INVALID_CUBE_STATE,
                                     message=f"Facelets invalid: {msg}")
            else:
                result = self._run_engine(facelets)

        if result.ok:
            logger.info("Solution: %s", result.solution or "(none needed)")
        else:
            logger.warning("Solve failed (%s): %s", result.failure.value, result.message)

        with self._lock:
            self._solve_cache[facelets] = result
        return result

    # asynchronous convenience wrapper: returns Future
    def solve_async(self, facelets: str) -> "concurrent.futures.Future[SolveResult]":
        return _EXECUTOR.submit(self.solve, facelets)

    def clear_cache(self) -> None:
        """Clear the internal solve cache."""
        with self._lock:
            self._solve_cache.clear()

    @property
    def cache_size(self) -> int:
        with self._lock:
            return len(self._solve_cache)
