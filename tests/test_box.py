import numpy as np
import pytest

from securebox.box import SecureBox


def test_toggle_flips_cross_once():
    box = SecureBox(3, 4, shuffle_iterations=0)
    box.toggle(1, 2)
    expected = np.array(
        [
            [0, 0, 1, 0],
            [1, 1, 1, 1],
            [0, 0, 1, 0],
        ],
        dtype=bool,
    )
    assert np.array_equal(box.get_state(), expected)


def test_toggle_pivot_of_single_cell_box():
    box = SecureBox(1, 1, shuffle_iterations=0)
    box.toggle(0, 0)
    assert box.get_state().tolist() == [[True]]


@pytest.mark.parametrize("shape", [(1, 1), (2, 3), (4, 4), (5, 2)])
def test_toggle_twice_is_identity(rng, shape):
    box = SecureBox(*shape, rng=rng)
    before = box.get_state()
    for r in range(shape[0]):
        for c in range(shape[1]):
            box.toggle(r, c)
            box.toggle(r, c)
            assert np.array_equal(box.get_state(), before)


def test_toggles_commute(rng):
    state = rng.random((4, 5)) < 0.5
    seq1 = [(0, 1), (3, 4), (2, 2)]
    seq2 = [(1, 0), (3, 4), (0, 3), (2, 1)]

    a = SecureBox.from_state(state)
    for r, c in seq1 + seq2:
        a.toggle(r, c)
    b = SecureBox.from_state(state)
    for r, c in seq2 + seq1:
        b.toggle(r, c)
    assert np.array_equal(a.get_state(), b.get_state())


def test_is_locked_and_count():
    box = SecureBox.from_state(np.zeros((2, 2), dtype=bool))
    assert not box.is_locked()
    assert box.count_locked() == 0
    box.toggle(0, 0)
    assert box.is_locked()
    assert box.count_locked() == 3


def test_get_state_is_a_copy():
    box = SecureBox(2, 2, shuffle_iterations=0)
    snapshot = box.get_state()
    snapshot[0, 0] = True
    assert not box.is_locked()


def test_from_state_copies_input():
    state = np.array([[True, False]])
    box = SecureBox.from_state(state)
    state[0, 0] = False
    assert box.get_state().tolist() == [[True, False]]


def test_from_state_rejects_non_2d():
    with pytest.raises(ValueError):
        SecureBox.from_state(np.zeros(3, dtype=bool))


def test_toggle_out_of_range_raises():
    box = SecureBox(2, 3, shuffle_iterations=0)
    with pytest.raises(IndexError):
        box.toggle(2, 0)
    with pytest.raises(IndexError):
        box.toggle(0, -1)


def test_same_seed_same_shuffle():
    a = SecureBox(6, 5, seed=42)
    b = SecureBox(6, 5, seed=42)
    assert np.array_equal(a.get_state(), b.get_state())


def test_shuffle_iterations_are_applied():
    box = SecureBox(3, 3, seed=1, shuffle_iterations=1)
    # one toggle locks exactly one cross: 3 + 3 - 1 cells
    assert box.count_locked() == 5


@pytest.mark.parametrize("shape", [(0, 0), (0, 4), (3, 0)])
def test_empty_box_is_unlocked(shape):
    box = SecureBox(*shape, seed=3)
    assert not box.is_locked()
    assert box.get_state().shape == shape


def test_negative_dimensions_raise():
    with pytest.raises(ValueError):
        SecureBox(-1, 2)


def test_str_and_repr():
    box = SecureBox.from_state(np.array([[True, False], [False, False]]))
    assert str(box) == "10\n00"
    assert repr(box) == "SecureBox(y=2, x=2, locked=1)"
