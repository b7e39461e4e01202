import pytest

from smfwrite.sequencer import DeltaTimeSequencer

ONE_SECOND = 1_000_000


def _started_sequencer(start):
    seq = DeltaTimeSequencer(DeltaTimeSequencer.calculate_micros_per_tick(60.0, 1), False)
    seq.start(start)
    return seq


def test_calculate_micros_per_tick():
    assert DeltaTimeSequencer.calculate_micros_per_tick(60.0, 1) == ONE_SECOND
    assert DeltaTimeSequencer.calculate_micros_per_tick(120.0, 480) == 1041


def test_from_tempo():
    seq = DeltaTimeSequencer.from_tempo(120.0, 480, True)
    assert seq.micros_per_tick == 1041


def test_invalid_micros_per_tick():
    with pytest.raises(ValueError):
        DeltaTimeSequencer(0, False)


def test_can_sequence():
    micros = 10 * ONE_SECOND
    seq = _started_sequencer(micros)
    assert seq.microseconds(micros) == 0
    assert seq.inactivity_micros(micros) == 0

    for step, expected_total in ((1, 1), (1, 2), (2, 4), (10, 14)):
        micros += step * ONE_SECOND
        delta = seq.get_delta(micros)
        assert seq.microseconds(micros) == expected_total * ONE_SECOND
        assert seq.inactivity_micros(micros) == 0
        assert delta == step

    micros += 3 * ONE_SECOND
    seq.pause(micros)

    micros += 8 * ONE_SECOND
    assert seq.get_delta(micros) == 3

    micros += 7 * ONE_SECOND
    assert seq.get_delta(micros) == 0

    micros += 17 * ONE_SECOND
    seq.unpause(micros)

    micros += 5 * ONE_SECOND
    assert seq.get_delta(micros) == 5

    micros += ONE_SECOND
    assert seq.get_delta(micros) == 1

    assert seq.get_delta(micros) == 0

    micros += ONE_SECOND
    seq.pause(micros)

    micros += 17 * ONE_SECOND
    seq.unpause(micros)

    assert seq.get_delta(micros) == 1
    assert seq.get_delta(micros) == 0


def test_can_sequence_pause():
    micros = 10 * ONE_SECOND
    seq = _started_sequencer(micros)
    for step in (1, 1, 2, 10):
        micros += step * ONE_SECOND
        assert seq.get_delta(micros) == step

    micros += 3 * ONE_SECOND
    seq.pause(micros)
    micros += 17 * ONE_SECOND
    seq.unpause(micros)
    micros += 5 * ONE_SECOND
    assert seq.get_delta(micros) == 8


def test_can_sequence_pause1():
    micros = 10 * ONE_SECOND
    seq = _started_sequencer(micros)
    for step in (1, 1, 2, 10):
        micros += step * ONE_SECOND
        assert seq.get_delta(micros) == step

    seq.pause(micros)
    assert seq.get_delta(micros) == 0

    micros += 17 * ONE_SECOND
    seq.unpause(micros)
    assert seq.get_delta(micros) == 0


def test_microseconds_frozen_while_paused():
    seq = _started_sequencer(10 * ONE_SECOND)
    seq.pause(13 * ONE_SECOND)
    assert seq.microseconds(50 * ONE_SECOND) == 3 * ONE_SECOND


def test_first_event_starts_clock():
    seq = DeltaTimeSequencer(ONE_SECOND, True)
    assert seq.get_delta(5 * ONE_SECOND) == 0
    assert seq.get_delta(7 * ONE_SECOND) == 2


def test_inactivity_before_start_is_zero():
    seq = DeltaTimeSequencer(ONE_SECOND, False)
    assert seq.inactivity_micros(99 * ONE_SECOND) == 0


def test_inactivity_grows_after_last_event():
    seq = _started_sequencer(10 * ONE_SECOND)
    assert seq.get_delta(12 * ONE_SECOND) == 2
    assert seq.inactivity_micros(12 * ONE_SECOND + 500) == 500


def test_stop_resets_start():
    seq = _started_sequencer(10 * ONE_SECOND)
    seq.get_delta(12 * ONE_SECOND)
    seq.stop()
    assert seq.inactivity_micros(20 * ONE_SECOND) == 0


def test_pause_ignored_before_start():
    seq = DeltaTimeSequencer(ONE_SECOND, False)
    seq.pause(5 * ONE_SECOND)
    seq.start(10 * ONE_SECOND)
    assert seq.get_delta(13 * ONE_SECOND) == 3