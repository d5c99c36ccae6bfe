from app_types import SolveFailure
from cube_solver import CubeSolver
from cubie import apply_moves
from helpers import SOLVED


class CountingEngine:
    def __init__(self, answer="R U", error=None):
        self.answer = answer
        self.error = error
        self.calls = 0

    def __call__(self, facelets):
        self.calls += 1
        if self.error:
            raise self.error
        return self.answer


def test_solve_scramble_with_kociemba():
    state = apply_moves(SOLVED, "R U R' F2 D L'")
    result = CubeSolver().solve(state)
    assert result.ok, result.message
    assert result.failure is None
    assert apply_moves(state, result.solution) == SOLVED


def test_solved_cube_needs_no_moves():
    engine = CountingEngine()
    result = CubeSolver(engine=engine).solve(SOLVED)
    assert result.ok and result.solution == ""
    assert engine.calls == 0


def test_invalid_face_string():
    solver = CubeSolver(engine=CountingEngine())
    for bad in (SOLVED[:50], SOLVED[:53] + 'N', 'X' * 54):
        result = solver.solve(bad)
        assert not result.ok
        assert result.failure is SolveFailure.INVALID_FACE_STRING


def test_invalid_cube_state():
    twisted = SOLVED[:8] + 'F' + 'U' + SOLVED[10:20] + 'R' + SOLVED[21:]
    engine = CountingEngine()
    result = CubeSolver(engine=engine).solve(twisted)
    assert result.failure is SolveFailure.INVALID_CUBE_STATE
    assert "Twist error" in result.message
    assert engine.calls == 0


def test_engine_errors_are_reported():
    state = apply_moves(SOLVED, "F")
    result = CubeSolver(engine=CountingEngine(error=ValueError("Error. Probably cubestring is invalid"))).solve(state)
    assert result.failure is SolveFailure.NO_SOLUTION
    assert result.message == "Error. Probably cubestring is invalid"

    result = CubeSolver(engine=CountingEngine(answer="")).solve(state)
    assert result.failure is SolveFailure.NO_SOLUTION


def test_results_are_cached():
    state = apply_moves(SOLVED, "B")
    engine = CountingEngine(answer="B'")
    solver = CubeSolver(engine=engine)
    assert solver.solve(state).solution == "B'"
    assert solver.solve(state).solution == "B'"
    assert engine.calls == 1
    assert solver.cache_size == 1

    solver.clear_cache()
    solver.solve(state)
    assert engine.calls == 2


def test_solve_async():
    state = apply_moves(SOLVED, "L")
    future = CubeSolver(engine=CountingEngine(answer="L'")).solve_async(state)
    result = future.result(timeout=10)
    assert result.ok and result.solution == "L'"
