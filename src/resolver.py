"""
resolver.py — find how the cube sits in front of the cameras
============================================================

The cube may be placed in any of its 24 rotations. For each candidate
orientation, in catalog order (identity first), the two label vectors are
assembled into a state and passed to a pre-check; the first state that passes
wins. At most 24 pre-checks are made per call.

Sticker counts are the same under every orientation, so only the structural
part of the check can tell orientations apart. Some highly symmetric states
(the solved cube among them) pass under more than one orientation; the first
one in catalog order is returned.

-------------------------------------------------------------------------------

Copyright (c) 2025 Facundo Gauna & Ulises Carnevale. Licensed under MIT License.
"""

import logging
from typing import Callable, Optional, Sequence

from app_types import CubeOrientation, ResolveResult
from assembler import assemble
from config import NO_ORIENTATION_MESSAGE
from orientations import IDENTITY, all_orientations
from validator import structural_check, validate

logger = logging.getLogger(__name__)
logger.addHandler(logging.NullHandler())


class OrientationResolver:
    def __init__(self,
                 check: Optional[Callable[[str], bool]] = None,
                 catalog: Optional[Sequence[CubeOrientation]] = None):
        self.check = check or structural_check
        self.catalog = tuple(catalog) if catalog is not None else all_orientations()

    def resolve(self, labels_cam1: Sequence[str], labels_cam2: Sequence[str]) -> ResolveResult:
        checks = 0
        for orientation in self.catalog:
            state = assemble(labels_cam1, labels_cam2, orientation)
            checks += 1
            if self.check(state):
                logger.info("Orientation %s accepted after %d checks", orientation, checks)
                return ResolveResult(ok=True, state=state, orientation=orientation,
                                     checks=checks, report=validate(state))

        report = validate(assemble(labels_cam1, labels_cam2, IDENTITY))
        logger.warning("%s (%s)", NO_ORIENTATION_MESSAGE, report.summary())
        return ResolveResult(ok=False, checks=checks, report=report, message=NO_ORIENTATION_MESSAGE)
