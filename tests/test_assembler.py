import pytest

from assembler import assemble, build_net_text, disassemble, to_color_string, to_face_string
from config import COLOR_INIT_STATE
from cubie import apply_moves
from helpers import SOLVED
from orientations import IDENTITY, all_orientations, orientation_for


def test_identity_assembly_of_solved_labels(solved_labels):
    assert assemble(*solved_labels, IDENTITY) == SOLVED


def test_wrong_vector_length(solved_labels):
    with pytest.raises(ValueError):
        assemble(solved_labels[0][:23], solved_labels[1], IDENTITY)


def test_unknown_labels_propagate(solved_labels):
    labels1 = list(solved_labels[0])
    labels1[0] = 'N'        # first sticker of the front slot
    labels1[12] = 'X'       # fifth sticker of the right slot
    state = assemble(labels1, solved_labels[1], IDENTITY)
    assert state[18] == 'N'
    assert state[9 + 5] == 'N'
    assert state.count('N') == 2
    assert state[22] == 'F'


def test_slots_follow_orientation(solved_labels):
    o = orientation_for('D', 'F')
    assert o.camera1 == ('F', 'L', 'D')
    state = assemble(*solved_labels, o)
    # the green stickers of the right slot land on the left face
    assert state[36:40] == 'RRRR'
    assert state[40] == 'L'
    # the white stickers of the up slot land on the down face
    assert state[27:31] == 'UUUU'
    assert state[31] == 'D'


def test_disassemble_inverts_assemble():
    state = apply_moves(SOLVED, "R U F' L2 D")
    for o in all_orientations():
        assert assemble(*disassemble(state, o), o) == state


def test_disassemble_identity_solved(solved_labels):
    labels1, labels2 = disassemble(SOLVED, IDENTITY)
    assert (labels1, labels2) == solved_labels


def test_color_face_strings():
    assert to_color_string(SOLVED) == COLOR_INIT_STATE
    assert to_face_string(COLOR_INIT_STATE) == SOLVED
    assert to_face_string("WX") == "UN"


def test_build_net_text():
    text = build_net_text(SOLVED)
    assert "    WWW" in text
    assert "BBB RRR GGG OOO" in text
    assert "Front (Red   ): FFFFFFFFF  RRRRRRRRR" in text
