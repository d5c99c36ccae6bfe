from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Optional, Tuple

from config import FACE_ORDER, UNKNOWN


@dataclass(frozen=True)
class CalibratedPoint:
    x: int
    y: int


@dataclass(frozen=True)
class ColorRule:
    """One calibrated HSV range for a color letter (inclusive bounds)."""
    color: str
    h_min: int
    h_max: int
    s_min: int
    s_max: int
    v_min: int
    v_max: int

    @property
    def wraps(self) -> bool:
        # only red straddles hue 0/179
        return self.color == 'R' and self.h_min > self.h_max

    def to_line(self) -> str:
        return (f"{self.color} {self.h_min} {self.h_max} "
                f"{self.s_min} {self.s_max} {self.v_min} {self.v_max}")


@dataclass(frozen=True)
class CubeOrientation:
    """Canonical face letter seated in each physical slot of both cameras."""
    camera1: Tuple[str, str, str]
    camera2: Tuple[str, str, str]

    @property
    def faces(self) -> Tuple[str, ...]:
        return self.camera1 + self.camera2

    def __str__(self) -> str:
        return f"{''.join(self.camera1)}|{''.join(self.camera2)}"


@dataclass
class ValidationReport:
    valid: bool
    counts: Dict[str, int]

    def __bool__(self) -> bool:
        return self.valid

    def summary(self) -> str:
        return " ".join(f"{k}:{self.counts.get(k, 0)}" for k in FACE_ORDER + [UNKNOWN])


@dataclass
class ResolveResult:
    ok: bool
    state: Optional[str] = None
    orientation: Optional[CubeOrientation] = None
    checks: int = 0
    report: Optional[ValidationReport] = None
    message: str = ""


class SolveFailure(Enum):
    INVALID_FACE_STRING = "invalid face string"
    INVALID_CUBE_STATE = "invalid cube state"
    NO_SOLUTION = "no solution found"


@dataclass
class SolveResult:
    ok: bool
    solution: str = ""
    failure: Optional[SolveFailure] = None
    message: str = ""


@dataclass
class DetectionResult:
    face_str: str
    color_str: str
    solution_str: str
    has_errors: bool
    orientation: Optional[CubeOrientation] = None
    attempts: int = 0
    message: str = ""
    report: Optional[ValidationReport] = field(default=None, repr=False)
