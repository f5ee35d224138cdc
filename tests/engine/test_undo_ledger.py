import pytest

from engine.undo_ledger import MAX_UNDO_STATES, UndoLedger
from models.snapshot import BLANK_SNAPSHOT


@pytest.fixture
def ledger():
    ledger = UndoLedger()
    ledger.reset(0, BLANK_SNAPSHOT)
    return ledger


def test_default_depth_is_three():
    assert MAX_UNDO_STATES == 3
    assert UndoLedger().max_states == 3


def test_reset_on_blank_frame_is_empty(ledger):
    assert len(ledger) == 0
    assert not ledger.can_undo
    assert ledger.frame_index == 0


def test_reset_on_drawn_frame_seeds_one_state():
    ledger = UndoLedger()
    ledger.reset(4, "S0")

    assert ledger.state().frame_index == 4
    assert ledger.state().states == ("S0",)


def test_undo_on_empty_returns_none(ledger):
    assert ledger.undo() is None


def test_keeps_only_last_k_states(ledger):
    for snap in ("A", "B", "C", "D"):
        ledger.save(snap)

    assert ledger.state().states == ("B", "C", "D")


def test_k_undos_after_overflow_reach_blank(ledger):
    for snap in ("A", "B", "C", "D"):
        ledger.save(snap)

    assert ledger.undo() == "C"
    assert ledger.undo() == "B"
    assert ledger.undo() == BLANK_SNAPSHOT
    assert ledger.undo() is None


def test_undo_restores_seeded_state():
    ledger = UndoLedger()
    ledger.reset(2, "S0")
    ledger.save("S1")

    assert ledger.undo() == "S0"
    assert ledger.undo() == BLANK_SNAPSHOT


def test_reset_discards_history(ledger):
    ledger.save("A")
    ledger.save("B")

    ledger.reset(1, BLANK_SNAPSHOT)

    assert ledger.frame_index == 1
    assert ledger.undo() is None


def test_rejects_zero_depth():
    with pytest.raises(ValueError):
        UndoLedger(0)
