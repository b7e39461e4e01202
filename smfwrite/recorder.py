"""Record live MIDI events into a Standard MIDI File with real-time deltas."""

from __future__ import annotations

import logging
import time
from typing import Callable, Optional

from smfwrite.sequencer import DeltaTimeSequencer
from smfwrite.writer import SmfWriter

logger = logging.getLogger(__name__)


def _monotonic_micros() -> int:
    return time.monotonic_ns() // 1000


class MidiRecorder:
    """Feed incoming MIDI messages to an :class:`SmfWriter`.

    Each handler converts the current clock reading into delta ticks.  After a
    stretch of inactivity, :meth:`poll` closes the current file and starts a
    new one.  The first file is started on construction.
    """

    def __init__(
        self,
        writer: SmfWriter,
        tempo: float = 120.0,
        resolution: int = 480,
        clock: Optional[Callable[[], int]] = None,
        basename: str = "test",
        inactivity_micros: int = 10_000_000,
    ) -> None:
        self.writer = writer
        self.tempo = tempo
        self.resolution = resolution
        self.basename = basename
        self.inactivity_micros = inactivity_micros
        self._clock = clock if clock is not None else _monotonic_micros
        self.sequencer = DeltaTimeSequencer.from_tempo(tempo, resolution, True)
        self._last_activity = 0
        self.reset()

    def _delta(self) -> int:
        return self.sequencer.get_delta(self._clock())

    def handle_note_on(self, channel: int, pitch: int, velocity: int) -> None:
        self.writer.add_note_on_event(self._delta(), channel, pitch, velocity)

    def handle_note_off(self, channel: int, pitch: int, velocity: int) -> None:
        self.writer.add_note_off_event(self._delta(), channel, pitch)

    def handle_after_touch_poly(self, channel: int, note: int, value: int) -> None:
        self.writer.add_poly_after_touch(self._delta(), note, value, channel)

    def handle_control_change(self, channel: int, number: int, value: int) -> None:
        self.writer.add_control_change(self._delta(), number, value, channel)

    def handle_program_change(self, channel: int, number: int) -> None:
        self.writer.add_program_change(self._delta(), number, channel)

    def handle_after_touch_channel(self, channel: int, pressure: int) -> None:
        self.writer.add_after_touch(self._delta(), pressure, channel)

    def handle_pitch_bend(self, channel: int, value: int) -> None:
        self.writer.add_pitch_bend(self._delta(), int(value), channel)

    def reset(self) -> None:
        """Close the current file and start a fresh one with a tempo event."""
        self.writer.close()
        self.sequencer.stop()
        self._last_activity = 0
        path = self.writer.set_filename(self.basename)
        logger.info("recording to %s", path)
        self.writer.ticks_per_beat = self.resolution
        self.writer.write_header()
        self.writer.add_set_tempo(0, self.tempo)

    def poll(self, had_activity: bool) -> bool:
        """Note activity and start a new file after inactivity; True if reset."""
        now = self._clock()
        if had_activity:
            self._last_activity = now
        if self._last_activity > 0 and now > self._last_activity + self.inactivity_micros:
            logger.info("inactivity, starting a new file")
            self.reset()
            return True
        return False