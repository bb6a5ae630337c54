from pointer import PointerState


def test_starts_absent():
    pointer = PointerState()
    assert pointer.snapshot() is None
    assert not pointer.present


def test_last_move_wins():
    pointer = PointerState()
    pointer.move(1, 2)
    pointer.move(30.5, 40)
    assert pointer.snapshot() == (30.5, 40.0)
    assert pointer.present


def test_leave_clears_position():
    pointer = PointerState()
    pointer.move(10, 10)
    pointer.leave()
    assert pointer.snapshot() is None
