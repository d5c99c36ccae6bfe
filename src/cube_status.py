"""
cube_status.py — detection session
==================================

`CubeStatus` drives one detection session: capture both cameras, classify the
stickers, search the 24 orientations, and hand the resolved state to the
solver. Progress is tracked by a `transitions` state machine::

    idle -> capturing -> classifying -> orientation_search -> validated -> solved
                ^                                  |               |
                |                                  v               v
                +------------ (retry) -------- exhausted -> reported_failure

`reset` returns to `idle` from any state.

Retry policy
- Up to `MAX_DETECTION_ATTEMPTS` capture+classify+resolve cycles. A cycle that
  finds no valid orientation (bad lighting, a sticker misread, the cube
  slightly moved) is simply retried with fresh frames.
- The solver runs once, on the first validated state. Its failures are not
  retried and are reported as the solver phrased them.

-------------------------------------------------------------------------------

Copyright (c) 2025 Facundo Gauna & Ulises Carnevale. Licensed under MIT License.
"""

import logging
from typing import List, Optional

import transitions

from app_types import DetectionResult, ResolveResult
from assembler import assemble, to_color_string
from config import MAX_DETECTION_ATTEMPTS, UNKNOWN
from cube_solver import CubeSolver
from orientations import IDENTITY
from resolver import OrientationResolver

logger = logging.getLogger(__name__)
logger.addHandler(logging.NullHandler())

STATES = [
    'idle', 'capturing', 'classifying', 'orientation_search',
    'validated', 'exhausted', 'solved', 'reported_failure',
]


class CubeStatus:
    def __init__(self,
                 capture,
                 solver: Optional[CubeSolver] = None,
                 resolver: Optional[OrientationResolver] = None,
                 max_attempts: int = MAX_DETECTION_ATTEMPTS,
                 parallel: bool = True):
        """
        `capture` is anything with `capture_and_classify(parallel) -> (labels1, labels2)`,
        normally a `capture.DualCameraCapture`.
        """
        self.capture = capture
        self.solver = solver or CubeSolver()
        self.resolver = resolver or OrientationResolver()
        self.max_attempts = max_attempts
        self.parallel = parallel

        self.labels1: List[str] = []
        self.labels2: List[str] = []
        self.last_resolve: Optional[ResolveResult] = None
        self.attempts = 0

        self.machine = transitions.Machine(
            model=self,
            states=STATES,
            initial='idle',
            auto_transitions=False,
        )
        self.machine.add_transition(trigger='start_capture', source=['idle', 'exhausted'], dest='capturing')
        self.machine.add_transition(trigger='labels_ready', source='capturing', dest='classifying')
        self.machine.add_transition(trigger='search_orientation', source='classifying', dest='orientation_search')
        self.machine.add_transition(trigger='accept', source='orientation_search', dest='validated')
        self.machine.add_transition(trigger='exhaust', source='orientation_search', dest='exhausted')
        self.machine.add_transition(trigger='mark_solved', source='validated', dest='solved')
        self.machine.add_transition(trigger='report_failure', source=['validated', 'exhausted'],
                                    dest='reported_failure')
        self.machine.add_transition(trigger='reset', source='*', dest='idle')

    def _attempt(self) -> ResolveResult:
        self.start_capture()
        self.labels1, self.labels2 = self.capture.capture_and_classify(parallel=self.parallel)

        self.labels_ready()
        unknown = self.labels1.count(UNKNOWN) + self.labels2.count(UNKNOWN)
        if unknown:
            logger.warning("%d of %d stickers could not be classified",
                           unknown, len(self.labels1) + len(self.labels2))

        self.search_orientation()
        result = self.resolver.resolve(self.labels1, self.labels2)
        self.last_resolve = result
        if result.ok:
            self.accept()
        else:
            self.exhaust()
        return result

    def detect_status(self) -> DetectionResult:
        if self.state != 'idle':
            self.reset()
        self.attempts = 0

        result: Optional[ResolveResult] = None
        while self.attempts < self.max_attempts:
            self.attempts += 1
            logger.info("Detection attempt %d/%d", self.attempts, self.max_attempts)
            result = self._attempt()
            if result.ok:
                break
            logger.warning("Attempt %d failed: %s", self.attempts, result.message)

        if result is None or not result.ok:
            return self._failure_result(result)

        solve = self.solver.solve(result.state)
        if not solve.ok:
            self.report_failure()
            return DetectionResult(
                face_str=result.state,
                color_str=to_color_string(result.state),
                solution_str='',
                has_errors=True,
                orientation=result.orientation,
                attempts=self.attempts,
                message=solve.message,
                report=result.report,
            )

        self.mark_solved()
        return DetectionResult(
            face_str=result.state,
            color_str=to_color_string(result.state),
            solution_str=solve.solution,
            has_errors=False,
            orientation=result.orientation,
            attempts=self.attempts,
            message=solve.message,
            report=result.report,
        )

    def _failure_result(self, result: Optional[ResolveResult]) -> DetectionResult:
        if self.state == 'exhausted':
            self.report_failure()
        face_str = ''
        message = "no detection attempt was made"
        report = None
        if result is not None:
            # identity assembly, for diagnostics only
            face_str = assemble(self.labels1, self.labels2, IDENTITY)
            report = result.report
            message = result.message
            if report is not None:
                message = f"{message} ({report.summary()})"
        logger.error("Detection failed after %d attempts: %s", self.attempts, message)
        return DetectionResult(
            face_str=face_str,
            color_str=to_color_string(face_str),
            solution_str='',
            has_errors=True,
            attempts=self.attempts,
            message=message,
            report=report,
        )
