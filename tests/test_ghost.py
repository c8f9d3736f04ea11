import pytest

from services.ghost import GhostPosition, GhostRecord, GhostReplay
from services.typing_engine import Keystroke


def _record(times=(100, 200, 300, 400), text_length=100, wpm=40) -> GhostRecord:
    return GhostRecord(
        keystrokes=[Keystroke(float(t), "x", True) for t in times],
        text_length=text_length,
        wpm=wpm,
        timestamp=1.0,
    )


@pytest.fixture
def ghost(clock) -> GhostReplay:
    return GhostReplay(now_ms=clock)


def test_load_reports_presence(ghost):
    assert ghost.load(None) is False
    assert ghost.load(_record()) is True


def test_start_without_record(ghost):
    assert ghost.start(100) is False
    assert ghost.update() is None


def test_start_with_empty_log_is_ineligible(ghost):
    ghost.load(_record(times=()))
    assert ghost.start(100) is False


@pytest.mark.parametrize("current, eligible", [(100, True), (120, True), (80, True), (121, False), (125, False), (79, False)])
def test_length_tolerance(ghost, current, eligible):
    ghost.load(_record(text_length=100))
    assert ghost.start(current) is eligible


def test_ineligible_ghost_never_moves(ghost, clock):
    ghost.load(_record(text_length=100))
    assert ghost.start(125) is False
    clock.advance(10_000)
    assert ghost.update() is None
    assert ghost.position == 0


def test_update_catches_up_by_time(ghost, clock):
    ghost.load(_record())
    ghost.start(100)
    assert ghost.update() == GhostPosition(0, 0.0)
    clock.advance(100)
    assert ghost.update() == GhostPosition(1, 25.0)
    clock.advance(250)
    assert ghost.update() == GhostPosition(3, 75.0)
    clock.advance(10_000)
    assert ghost.update() == GhostPosition(4, 100.0)


def test_update_never_rewinds(ghost, clock):
    ghost.load(_record(times=(50, 60, 500, 900)))
    ghost.start(100)
    seen = []
    for step in (10, 45, 5, 300, 0, 200, 400, 1):
        clock.advance(step)
        seen.append(ghost.update().position)
    assert seen == sorted(seen)


def test_start_resets_cursor(ghost, clock):
    ghost.load(_record())
    ghost.start(100)
    clock.advance(1_000)
    ghost.update()
    assert ghost.start(100) is True
    assert ghost.position == 0


def test_stop_makes_ghost_inert(ghost, clock):
    ghost.load(_record())
    ghost.start(100)
    ghost.stop()
    clock.advance(1_000)
    assert ghost.update() is None


def test_should_save(ghost):
    assert ghost.should_save(1) is True
    ghost.load(_record(wpm=40))
    assert ghost.should_save(40) is False
    assert ghost.should_save(41) is True


def test_record_session_round_trip(ghost):
    keys = [Keystroke(0.0, "h", True), Keystroke(90.0, "q", False), Keystroke(150.0, "i", True)]
    record = ghost.record_session(keys, 2, 55)
    assert record.keystrokes == keys
    assert record.text_length == 2
    assert record.wpm == 55
    assert record.timestamp > 0

    replay = GhostReplay()
    assert replay.load(GhostRecord.from_dict(record.to_dict())) is True
    assert replay.start(2) is True


def test_from_dict_rejects_garbage():
    with pytest.raises((KeyError, TypeError, ValueError)):
        GhostRecord.from_dict({"keystrokes": "nope"})


def test_stats_and_player_ahead(ghost, clock):
    assert ghost.ghost_stats() is None
    ghost.load(_record(wpm=33))
    assert ghost.ghost_stats() == {"wpm": 33, "timestamp": 1.0}
    ghost.start(100)
    clock.advance(200)
    ghost.update()
    assert ghost.is_player_ahead(3) is True
    assert ghost.is_player_ahead(2) is False
    assert ghost.progress == 50.0
