"""Turn wall-clock microsecond timestamps into MIDI delta ticks."""

from __future__ import annotations


class DeltaTimeSequencer:
    """Track elapsed time and hand out tick deltas between events.

    A start time of zero means "not started": the first call to
    :meth:`get_delta` then starts the clock.
    """

    def __init__(self, micros_per_tick: int, start_timing_on_first_event: bool) -> None:
        micros_per_tick = int(micros_per_tick)
        if micros_per_tick <= 0:
            raise ValueError("micros_per_tick must be positive")
        self.micros_per_tick = micros_per_tick
        self._start_timing_on_first_event = start_timing_on_first_event
        self._start_micros = 0
        self._last_tick = 0
        self._remainder_ticks = 0
        self._paused_micros = 0
        self._paused = False

    @classmethod
    def from_tempo(
        cls, tempo: float, ticks_per_beat: int, start_timing_on_first_event: bool
    ) -> "DeltaTimeSequencer":
        """Build a sequencer from a tempo in beats per minute and a resolution."""
        return cls(cls.calculate_micros_per_tick(tempo, ticks_per_beat), start_timing_on_first_event)

    @staticmethod
    def calculate_micros_per_tick(bpm: float, ticks_per_beat: int) -> int:
        """Microseconds per tick, truncated to a whole number."""
        return int((60000000.0 / bpm) / ticks_per_beat)

    def stop(self) -> None:
        self._start_micros = 0
        self._last_tick = 0

    def start(self, current_micros: int) -> None:
        self._start_micros = current_micros
        self._last_tick = 0

    def pause(self, current_micros: int) -> None:
        """Freeze the clock, keeping the ticks elapsed since the last event."""
        if self._start_micros == 0 or self._paused:
            return
        self._paused_micros = current_micros
        paused_ticks = (current_micros - self._start_micros) // self.micros_per_tick
        self._remainder_ticks = paused_ticks - self._last_tick
        self._paused = True

    def unpause(self, current_micros: int) -> None:
        """Resume the clock so that paused time does not count."""
        if self._start_micros == 0 or not self._paused:
            return
        ticks = (current_micros - self._start_micros) // self.micros_per_tick
        self._last_tick = ticks - self._remainder_ticks
        self._paused = False

    def get_delta(self, current_micros: int) -> int:
        """Return the ticks elapsed since the previous call."""
        if self._start_micros == 0:
            self.start(current_micros)
            if self._start_timing_on_first_event:
                return 0

        ticks = (current_micros - self._start_micros) // self.micros_per_tick

        if self._paused:
            result = self._remainder_ticks
            if result > 0:
                self._remainder_ticks = 0
                return result
            return 0

        delta = ticks - self._last_tick
        self._last_tick = ticks
        return delta

    def microseconds(self, current_micros: int) -> int:
        """Microseconds elapsed since the start, frozen while paused."""
        if self._paused:
            return self._paused_micros - self._start_micros
        return current_micros - self._start_micros

    def inactivity_micros(self, current_micros: int) -> int:
        """Microseconds since the tick of the last event."""
        if self._start_micros == 0:
            return 0
        if self._last_tick == 0:
            return current_micros - self._start_micros
        return current_micros - self._last_tick * self.micros_per_tick - self._start_micros