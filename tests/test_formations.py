import pytest

from squadledger.config import get_layout, iter_layouts, slot_counts, slots
from squadledger.models import Formation, PlayerPosition


def test_every_formation_has_eleven_slots():
    layouts = list(iter_layouts())

    assert {layout.formation for layout in layouts} == set(Formation)
    assert all(layout.size == 11 for layout in layouts)


def test_slot_counts_follow_formation_label():
    counts = slot_counts("4-2-3-1")

    assert counts[PlayerPosition.GOALKEEPER] == 1
    assert counts[PlayerPosition.DEFENDER] == 4
    assert counts[PlayerPosition.MIDFIELDER] == 5
    assert counts[PlayerPosition.FORWARD] == 1


def test_slots_start_with_goalkeeper_and_stay_on_pitch():
    positions = list(slots(Formation.F_4_4_2))

    assert positions[0].position is PlayerPosition.GOALKEEPER
    assert positions[0].x == 50.0
    assert all(0 < slot.x < 100 and 0 < slot.y < 100 for slot in positions)
    assert all(slot.player_id is None for slot in positions)


def test_get_layout_missing_raises():
    with pytest.raises(KeyError):
        get_layout("2-3-5")
