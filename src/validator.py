"""
validator.py — structural checks on a 54-letter cube state
==========================================================

Two levels of checking:

* `validate`: sticker counts only. Each of `U R F D L B` must appear exactly
  9 times and nothing else may appear. Cheap, and the breakdown it returns is
  what gets shown to the user when detection fails.
* `verify_structure`: full solvability (centers in place, every cubie present
  once, flip/twist sums, permutation parity) via the cubie model.

`structural_check` combines both and is the default pre-check of the
orientation search.

-------------------------------------------------------------------------------

Copyright (c) 2025 Facundo Gauna & Ulises Carnevale. Licensed under MIT License.
"""

import logging
from collections import Counter
from typing import Tuple

from app_types import ValidationReport
from config import CENTER_INDICES, FACE_ORDER, UNKNOWN
from cubie import VERIFY_MESSAGES, CubieCube

logger = logging.getLogger(__name__)
logger.addHandler(logging.NullHandler())


def validate(state: str) -> ValidationReport:
    raw = Counter(state)
    counts = {face: raw.get(face, 0) for face in FACE_ORDER}
    counts[UNKNOWN] = len(state) - sum(counts.values())
    valid = (len(state) == 54
             and counts[UNKNOWN] == 0
             and all(counts[face] == 9 for face in FACE_ORDER))
    return ValidationReport(valid=valid, counts=counts)


def verify_structure(state: str) -> Tuple[bool, str]:
    """(ok, message) where message is the first problem found."""
    if not validate(state):
        return False, VERIFY_MESSAGES[-1]
    if any(state[idx] != face for face, idx in CENTER_INDICES.items()):
        return False, VERIFY_MESSAGES[-7]
    code = CubieCube.from_facelets(state).verify()
    return code == 0, VERIFY_MESSAGES[code]


def structural_check(state: str) -> bool:
    ok, message = verify_structure(state)
    if not ok:
        logger.debug("Structural check failed: %s", message)
    return ok
