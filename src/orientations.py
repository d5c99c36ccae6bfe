"""
orientations.py — the 24 ways a cube can sit in front of the cameras
====================================================================

The cameras see fixed physical slots: camera 1 the Front, Right and Up slots,
camera 2 the Back, Left and Down slots (`config.CAMERA_1_SLOTS` /
`config.CAMERA_2_SLOTS`). Which canonical face sits in each slot depends on how
the cube was put down, and there are exactly 24 possibilities (the rotation
group of the cube):

* 6 choices for the face in the Up slot,
* 4 quarter turns about that axis for the face in the Front slot,
* the Right slot is then fixed by handedness (Right = Up x Front), and every
  remaining slot holds the face opposite to its counterpart.

The catalog is generated once at import and is immutable. The identity
(camera 1 -> F,R,U ; camera 2 -> B,L,D) is always the first entry.

-------------------------------------------------------------------------------

Copyright (c) 2025 Facundo Gauna & Ulises Carnevale. Licensed under MIT License.
"""

from typing import Dict, List, Tuple

from app_types import CubeOrientation
from config import FACE_ORDER

# Outward normal of each canonical face (x = right, y = up, z = front).
FACE_NORMALS: Dict[str, Tuple[int, int, int]] = {
    'U': (0, 1, 0), 'D': (0, -1, 0),
    'R': (1, 0, 0), 'L': (-1, 0, 0),
    'F': (0, 0, 1), 'B': (0, 0, -1),
}
_NORMAL_TO_FACE = {v: k for k, v in FACE_NORMALS.items()}

# Front face tried first for each choice of Up (quarter turns follow from it).
_REFERENCE_FRONT = {'U': 'F', 'D': 'F', 'R': 'F', 'L': 'F', 'F': 'U', 'B': 'U'}


def _cross(a: Tuple[int, int, int], b: Tuple[int, int, int]) -> Tuple[int, int, int]:
    return (a[1] * b[2] - a[2] * b[1],
            a[2] * b[0] - a[0] * b[2],
            a[0] * b[1] - a[1] * b[0])


def opposite(face: str) -> str:
    x, y, z = FACE_NORMALS[face]
    return _NORMAL_TO_FACE[(-x, -y, -z)]


def right_of(up: str, front: str) -> str:
    return _NORMAL_TO_FACE[_cross(FACE_NORMALS[up], FACE_NORMALS[front])]


def orientation_for(up: str, front: str) -> CubeOrientation:
    """Orientation with `up` in the Up slot and `front` in the Front slot."""
    if front in (up, opposite(up)):
        raise ValueError(f"{front!r} is not adjacent to {up!r}")
    right = right_of(up, front)
    return CubeOrientation(
        camera1=(front, right, up),
        camera2=(opposite(front), opposite(right), opposite(up)),
    )


def _generate() -> Tuple[CubeOrientation, ...]:
    result: List[CubeOrientation] = []
    for up in FACE_ORDER:
        front = _REFERENCE_FRONT[up]
        for _ in range(4):
            result.append(orientation_for(up, front))
            # quarter turn about the up axis
            front = right_of(up, front)
    return tuple(result)


ORIENTATIONS: Tuple[CubeOrientation, ...] = _generate()
IDENTITY: CubeOrientation = ORIENTATIONS[0]


def all_orientations() -> Tuple[CubeOrientation, ...]:
    return ORIENTATIONS
