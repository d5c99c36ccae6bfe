"""
assembler.py — build the 54-letter cube state from two label vectors
====================================================================

Each camera delivers 24 color labels: 8 stickers for each of its 3 physical
slots, slot-major, in the order of the position calibration file. Given a
`CubeOrientation` (which canonical face sits in each slot) the labels are
written into that face's 8 non-center positions, translated color -> face
letter through `config.COLOR_TO_FACE`. Centers are never sampled: the center
of a face is its own letter by construction.

State layout: U(0-8) R(9-17) F(18-26) D(27-35) L(36-44) B(45-53), row-major,
center at local index 4. Unknown labels stay unknown (`N`).

`disassemble` is the exact inverse (state + orientation -> the two label
vectors the cameras would have produced). It is used to simulate captures.

-------------------------------------------------------------------------------

Copyright (c) 2025 Facundo Gauna & Ulises Carnevale. Licensed under MIT License.
"""

from typing import List, Sequence, Tuple

from app_types import CubeOrientation
from config import (
    CENTER_INDICES,
    COLOR_NAMES,
    COLOR_TO_FACE,
    FACE_ORDER,
    FACE_TO_COLOR,
    POINTS_PER_CAMERA,
    SAMPLED_LOCAL_INDICES,
    STICKERS_PER_SLOT,
    UNKNOWN,
)

FACE_NAMES = {'U': 'Up', 'R': 'Right', 'F': 'Front', 'D': 'Down', 'L': 'Left', 'B': 'Back'}


def _face_base(face: str) -> int:
    return FACE_ORDER.index(face) * 9


def _check_length(labels: Sequence[str], name: str) -> None:
    if len(labels) != POINTS_PER_CAMERA:
        raise ValueError(f"{name} must hold {POINTS_PER_CAMERA} labels, got {len(labels)}")


def assemble(labels_cam1: Sequence[str], labels_cam2: Sequence[str],
             orientation: CubeOrientation) -> str:
    _check_length(labels_cam1, "labels_cam1")
    _check_length(labels_cam2, "labels_cam2")

    state = [UNKNOWN] * 54
    for labels, faces in ((labels_cam1, orientation.camera1), (labels_cam2, orientation.camera2)):
        for slot, face in enumerate(faces):
            base = _face_base(face)
            state[CENTER_INDICES[face]] = face
            block = labels[slot * STICKERS_PER_SLOT:(slot + 1) * STICKERS_PER_SLOT]
            for local, color in zip(SAMPLED_LOCAL_INDICES, block):
                state[base + local] = COLOR_TO_FACE.get(color, UNKNOWN)
    return ''.join(state)


def disassemble(state: str, orientation: CubeOrientation) -> Tuple[List[str], List[str]]:
    if len(state) != 54:
        raise ValueError(f"state must be 54 characters, got {len(state)}")

    vectors = []
    for faces in (orientation.camera1, orientation.camera2):
        labels: List[str] = []
        for face in faces:
            base = _face_base(face)
            labels.extend(FACE_TO_COLOR.get(state[base + local], UNKNOWN)
                          for local in SAMPLED_LOCAL_INDICES)
        vectors.append(labels)
    return vectors[0], vectors[1]


def to_color_string(state: str) -> str:
    return ''.join(FACE_TO_COLOR.get(c, UNKNOWN) for c in state)


def to_face_string(colors: str) -> str:
    return ''.join(COLOR_TO_FACE.get(c, UNKNOWN) for c in colors)


def build_net_text(state: str) -> str:
    """
    Human readable breakdown of a state: an unfolded net of color letters
    followed by one line per face (face letters and color letters).
    """
    colors = to_color_string(state)

    def rows(face: str) -> List[str]:
        base = _face_base(face)
        return [colors[base + 3 * r:base + 3 * r + 3] for r in range(3)]

    pad = ' ' * 4
    lines = [pad + r for r in rows('U')]
    for left, front, right, back in zip(rows('L'), rows('F'), rows('R'), rows('B')):
        lines.append(' '.join((left, front, right, back)))
    lines.extend(pad + r for r in rows('D'))
    lines.append('')
    for face in FACE_ORDER:
        base = _face_base(face)
        center = FACE_TO_COLOR[face]
        lines.append(f"{FACE_NAMES[face]:<5} ({COLOR_NAMES[center]:<6}): "
                     f"{state[base:base + 9]}  {colors[base:base + 9]}")
    return '\n'.join(lines)
