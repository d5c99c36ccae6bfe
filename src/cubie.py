"""
cubie.py — facelet and cubie level cube model
=============================================

A small, dependency-free model of the cube used to check that a 54-letter face
string describes a cube that can actually be reached by turning faces, and to
apply move sequences in tests and diagnostics.

Facelet layout (kociemba order, row-major, center at local index 4)::

                 U1 U2 U3
                 U4 U5 U6
                 U7 U8 U9
       L1 L2 L3  F1 F2 F3  R1 R2 R3  B1 B2 B3
       L4 L5 L6  F4 F5 F6  R4 R5 R6  B4 B5 B6
       L7 L8 L9  F7 F8 F9  R7 R8 R9  B7 B8 B9
                 D1 D2 D3
                 D4 D5 D6
                 D7 D8 D9

String order: U1..U9, R1..R9, F1..F9, D1..D9, L1..L9, B1..B9.

On the cubie level a cube is four lists: which corner/edge cubie sits in each
slot (`cp`, `ep`) and how it is twisted/flipped there (`co`, `eo`). A state is
solvable iff every cubie is present once, the flips sum to an even number,
the twists sum to a multiple of 3 and the corner and edge permutations have
the same parity (`CubieCube.verify`).

-------------------------------------------------------------------------------

Copyright (c) 2025 Facundo Gauna & Ulises Carnevale. Licensed under MIT License.
"""

from typing import Dict, List, Optional, Sequence

from config import FACE_ORDER, FACES_INIT_STATE


# Facelet index of a face-local position, e.g. _f('U', 9) == 8.
def _f(face: str, n: int) -> int:
    return FACE_ORDER.index(face) * 9 + n - 1


CORNER_NAMES = ('URF', 'UFL', 'ULB', 'UBR', 'DFR', 'DLF', 'DBL', 'DRB')
EDGE_NAMES = ('UR', 'UF', 'UL', 'UB', 'DR', 'DF', 'DL', 'DB', 'FR', 'FL', 'BL', 'BR')

# Facelets of each corner slot, clockwise, starting with the U/D facelet.
CORNER_FACELETS = (
    (_f('U', 9), _f('R', 1), _f('F', 3)), (_f('U', 7), _f('F', 1), _f('L', 3)),
    (_f('U', 1), _f('L', 1), _f('B', 3)), (_f('U', 3), _f('B', 1), _f('R', 3)),
    (_f('D', 3), _f('F', 9), _f('R', 7)), (_f('D', 1), _f('L', 9), _f('F', 7)),
    (_f('D', 7), _f('B', 9), _f('L', 7)), (_f('D', 9), _f('R', 9), _f('B', 7)),
)

# Facelets of each edge slot; the first one defines the flip.
EDGE_FACELETS = (
    (_f('U', 6), _f('R', 2)), (_f('U', 8), _f('F', 2)), (_f('U', 4), _f('L', 2)),
    (_f('U', 2), _f('B', 2)), (_f('D', 6), _f('R', 8)), (_f('D', 2), _f('F', 8)),
    (_f('D', 4), _f('L', 8)), (_f('D', 8), _f('B', 8)), (_f('F', 6), _f('R', 4)),
    (_f('F', 4), _f('L', 6)), (_f('B', 6), _f('L', 4)), (_f('B', 4), _f('R', 6)),
)


VERIFY_MESSAGES: Dict[int, str] = {
    0: "Cube is solvable",
    -1: "There is not exactly one facelet of each colour",
    -2: "Not all 12 edges exist exactly once",
    -3: "Flip error: One edge has to be flipped",
    -4: "Not all corners exist exactly once",
    -5: "Twist error: One corner has to be twisted",
    -6: "Parity error: Two corners or two edges have to be exchanged",
    -7: "Centers are not in canonical positions",
}


def _parity(perm: Sequence[int]) -> int:
    inversions = 0
    for i in range(len(perm)):
        for j in range(i):
            if perm[j] > perm[i]:
                inversions += 1
    return inversions % 2


class CubieCube:
    """Cube on the cubie level. Defaults to the solved cube."""

    def __init__(self,
                 cp: Optional[List[int]] = None,
                 co: Optional[List[int]] = None,
                 ep: Optional[List[int]] = None,
                 eo: Optional[List[int]] = None):
        self.cp = list(cp) if cp is not None else list(range(8))
        self.co = list(co) if co is not None else [0] * 8
        self.ep = list(ep) if ep is not None else list(range(12))
        self.eo = list(eo) if eo is not None else [0] * 12

    def __eq__(self, other) -> bool:
        if not isinstance(other, CubieCube):
            return NotImplemented
        return (self.cp, self.co, self.ep, self.eo) == (other.cp, other.co, other.ep, other.eo)

    # ---------- facelet conversion ----------

    @classmethod
    def from_facelets(cls, facelets: str) -> "CubieCube":
        """
        Read cubies off a face string. Slots whose stickers match no cubie are
        left pointing at cubie 0, so `verify()` reports them as duplicates.
        """
        cc = cls(cp=[0] * 8, ep=[0] * 12)

        for i, slot in enumerate(CORNER_FACELETS):
            ori = 0
            while ori < 3 and facelets[slot[ori]] not in ('U', 'D'):
                ori += 1
            if ori == 3:
                continue
            col1 = facelets[slot[(ori + 1) % 3]]
            col2 = facelets[slot[(ori + 2) % 3]]
            for j, faces in enumerate(CORNER_NAMES):
                if col1 == faces[1] and col2 == faces[2]:
                    cc.cp[i] = j
                    cc.co[i] = ori
                    break

        for i, (a, b) in enumerate(EDGE_FACELETS):
            pair = facelets[a] + facelets[b]
            for j, faces in enumerate(EDGE_NAMES):
                if pair == faces:
                    cc.ep[i], cc.eo[i] = j, 0
                    break
                if pair == faces[::-1]:
                    cc.ep[i], cc.eo[i] = j, 1
                    break
        return cc

    def to_facelets(self) -> str:
        f = list(FACES_INIT_STATE)
        for i, slot in enumerate(CORNER_FACELETS):
            faces = CORNER_NAMES[self.cp[i]]
            for n in range(3):
                f[slot[(n + self.co[i]) % 3]] = faces[n]
        for i, slot in enumerate(EDGE_FACELETS):
            faces = EDGE_NAMES[self.ep[i]]
            for n in range(2):
                f[slot[(n + self.eo[i]) % 2]] = faces[n]
        return ''.join(f)

    # ---------- group operations ----------

    def multiply(self, b: "CubieCube") -> None:
        """In-place product self * b (apply b after self)."""
        cp = [self.cp[b.cp[i]] for i in range(8)]
        co = [(self.co[b.cp[i]] + b.co[i]) % 3 for i in range(8)]
        ep = [self.ep[b.ep[i]] for i in range(12)]
        eo = [(self.eo[b.ep[i]] + b.eo[i]) % 2 for i in range(12)]
        self.cp, self.co, self.ep, self.eo = cp, co, ep, eo

    def corner_parity(self) -> int:
        return _parity(self.cp)

    def edge_parity(self) -> int:
        return _parity(self.ep)

    def verify(self) -> int:
        """0 when solvable, otherwise one of the negative codes of VERIFY_MESSAGES."""
        if sorted(self.ep) != list(range(12)):
            return -2
        if sum(self.eo) % 2 != 0:
            return -3
        if sorted(self.cp) != list(range(8)):
            return -4
        if sum(self.co) % 3 != 0:
            return -5
        if self.edge_parity() != self.corner_parity():
            return -6
        return 0


# ---------- Basic face turns (clockwise quarter turns) ----------

MOVES: Dict[str, CubieCube] = {
    'U': CubieCube(cp=[3, 0, 1, 2, 4, 5, 6, 7], co=[0] * 8,
                   ep=[3, 0, 1, 2, 4, 5, 6, 7, 8, 9, 10, 11], eo=[0] * 12),
    'R': CubieCube(cp=[4, 1, 2, 0, 7, 5, 6, 3], co=[2, 0, 0, 1, 1, 0, 0, 2],
                   ep=[8, 1, 2, 3, 11, 5, 6, 7, 4, 9, 10, 0], eo=[0] * 12),
    'F': CubieCube(cp=[1, 5, 2, 3, 0, 4, 6, 7], co=[1, 2, 0, 0, 2, 1, 0, 0],
                   ep=[0, 9, 2, 3, 4, 8, 6, 7, 1, 5, 10, 11],
                   eo=[0, 1, 0, 0, 0, 1, 0, 0, 1, 1, 0, 0]),
    'D': CubieCube(cp=[0, 1, 2, 3, 5, 6, 7, 4], co=[0] * 8,
                   ep=[0, 1, 2, 3, 5, 6, 7, 4, 8, 9, 10, 11], eo=[0] * 12),
    'L': CubieCube(cp=[0, 2, 6, 3, 4, 1, 5, 7], co=[0, 1, 2, 0, 0, 2, 1, 0],
                   ep=[0, 1, 10, 3, 4, 5, 9, 7, 8, 2, 6, 11], eo=[0] * 12),
    'B': CubieCube(cp=[0, 1, 3, 7, 4, 5, 2, 6], co=[0, 0, 1, 2, 0, 0, 2, 1],
                   ep=[0, 1, 2, 11, 4, 5, 6, 10, 8, 9, 3, 7],
                   eo=[0, 0, 0, 1, 0, 0, 0, 1, 0, 0, 1, 1]),
}


def parse_moves(moves: str) -> List[str]:
    """Split "R U2 F'" into tokens, rejecting anything that is not a face turn."""
    tokens = moves.split()
    for tok in tokens:
        if tok[0] not in MOVES or tok[1:] not in ('', '2', "'"):
            raise ValueError(f"Invalid move {tok!r}")
    return tokens


def apply_moves(facelets: str, moves: str) -> str:
    """Face string after turning `moves` (kociemba notation) on `facelets`."""
    cc = CubieCube.from_facelets(facelets)
    for tok in parse_moves(moves):
        turns = {'': 1, '2': 2, "'": 3}[tok[1:]]
        for _ in range(turns):
            cc.multiply(MOVES[tok[0]])
    return cc.to_facelets()
