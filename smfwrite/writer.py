"""Write a single-track Standard MIDI File incrementally to disk."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional, Union

logger = logging.getLogger(__name__)

_HEADER_START = bytes(
    [
        0x4D, 0x54, 0x68, 0x64,  # "MThd"
        0x00, 0x00, 0x00, 0x06,
        0x00, 0x00,  # single-track format
        0x00, 0x01,  # one track
    ]
)
_TRACK_MARKER = b"MTrk"
_TRACK_LENGTH_OFFSET = 18
_FLUSH_THRESHOLD = 1000
_MAX_VAR_INT = 0x0FFFFFFF


class SmfWriteError(OSError):
    """Raised when the MIDI file cannot be created or written."""


def _encode_var_int(value: int) -> bytes:
    if value < 0 or value > _MAX_VAR_INT:
        raise ValueError(f"delta ticks out of range: {value}")
    groups = [value & 0x7F]
    value >>= 7
    while value:
        groups.append((value & 0x7F) | 0x80)
        value >>= 7
    return bytes(reversed(groups))


class SmfWriter:
    """Buffered writer for one MIDI track, stored in ``directory``."""

    def __init__(self, directory: Union[str, Path] = ".") -> None:
        self._directory = Path(directory)
        self._path: Optional[Path] = None
        self._buffer = bytearray()
        self._track_size = 0
        self._bytes_written = 0
        self.ticks_per_beat = 480

    def __enter__(self) -> "SmfWriter":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    @property
    def filename(self) -> Optional[Path]:
        """Path of the file being written, once chosen."""
        return self._path

    @property
    def bytes_written(self) -> int:
        """Bytes appended to the file since the file name was set."""
        return self._bytes_written

    def set_filename(self, filename: str) -> Path:
        """Choose ``<filename>.mid``, or ``<filename><n>.mid`` if taken, and create it."""
        self.flush()
        candidate = self._directory / f"{filename}.mid"
        count = 1
        while candidate.exists():
            candidate = self._directory / f"{filename}{count}.mid"
            count += 1
        try:
            candidate.open("ab").close()
        except OSError as exc:
            raise SmfWriteError(f"failed to create file {candidate}") from exc
        self._path = candidate
        self._bytes_written = 0
        logger.info("using filename %s", candidate)
        return candidate

    def write_header(self) -> None:
        """Write the file header and a track header with a zero length."""
        self._buffer += _HEADER_START
        self._buffer += (self.ticks_per_beat & 0xFFFF).to_bytes(2, "big")
        self._buffer += _TRACK_MARKER
        self._buffer += bytes(4)
        self.flush()

    def flush(self) -> None:
        """Append the buffered bytes to the file."""
        if not self._buffer:
            return
        if self._path is None:
            raise SmfWriteError("no file name has been set")
        try:
            with self._path.open("ab") as fh:
                written = fh.write(self._buffer)
        except OSError as exc:
            raise SmfWriteError(f"not able to open {self._path}") from exc
        self._bytes_written += written
        self._buffer.clear()

    def close(self) -> None:
        """Flush and patch the track length into the track header."""
        self.flush()
        if self._track_size <= 0 or self._path is None:
            return
        try:
            with self._path.open("r+b") as fh:
                fh.seek(_TRACK_LENGTH_OFFSET)
                fh.write((self._track_size & 0xFFFFFFFF).to_bytes(4, "big"))
        except OSError as exc:
            raise SmfWriteError(f"failed to update track length in {self._path}") from exc
        logger.debug("track size %d", self._track_size)
        self._track_size = 0

    def microseconds_per_tick(self, bpm: float) -> int:
        """Microseconds per tick at ``bpm`` with the current resolution."""
        return int((60000000.0 / bpm) / self.ticks_per_beat)

    def add_event(self, deltaticks: int, data: bytes) -> None:
        """Append a delta time followed by the raw event bytes."""
        payload = bytes(data)
        delta = _encode_var_int(deltaticks)
        self._buffer += delta
        self._buffer += payload
        self._track_size += len(delta) + len(payload)
        if len(self._buffer) > _FLUSH_THRESHOLD:
            self.flush()

    def add_note_on_event(self, deltaticks: int, channel: int, key: int, velocity: int) -> None:
        self.add_event(deltaticks, bytes([0x90 | channel, key, velocity]))

    def add_note_off_event(self, deltaticks: int, channel: int, key: int) -> None:
        self.add_event(deltaticks, bytes([0x80 | channel, key, 0]))

    def add_program_change(self, deltaticks: int, program_number: int, channel: int) -> None:
        self.add_event(deltaticks, bytes([0xD0 | channel, program_number]))

    def add_control_change(
        self, deltaticks: int, control_number: int, control_value: int, channel: int
    ) -> None:
        self.add_event(deltaticks, bytes([0xC0 | channel, control_number, control_value]))

    def add_pitch_bend(self, deltaticks: int, pitch_value: Union[int, float], channel: int) -> None:
        """Pitch bend from a signed integer, or from a float scaled by 0x2000."""
        if isinstance(pitch_value, float):
            pitch_value = int(pitch_value * 0x2000)
        normalized = (pitch_value + 0x2000) & 0xFFFFFFFF
        msb = (normalized >> 9) & 0xFF
        lsb = normalized & 0x7F
        self.add_event(deltaticks, bytes([0xE0 | channel, lsb, msb]))

    def add_after_touch(self, deltaticks: int, pressure: int, channel: int) -> None:
        self.add_event(deltaticks, bytes([0xA0 | channel, pressure]))

    def add_poly_after_touch(
        self, deltaticks: int, note_number: int, pressure: int, channel: int
    ) -> None:
        self.add_event(deltaticks, bytes([0xA0 | channel, note_number, pressure]))

    def add_key_signature(self, deltaticks: int, sf: int, mi: int) -> None:
        self.add_event(deltaticks, bytes([0xFF, 0x59, sf & 0xFF, mi]))

    def add_time_signature(self, deltaticks: int, nn: int, dd: int, cc: int, bb: int) -> None:
        self.add_event(deltaticks, bytes([0xFF, 0x58, nn, dd, cc, bb]))

    def add_smpte_offset(
        self, deltaticks: int, hr: int, mn: int, se: int, fr: int, ff: int
    ) -> None:
        self.add_event(deltaticks, bytes([0x80, hr, mn, se, fr, ff]))

    def add_set_tempo(self, deltaticks: int, tempo: float) -> None:
        """Set-tempo meta event for ``tempo`` beats per minute."""
        micros_per_quarter = int(60000000 / tempo)
        self.add_event(
            deltaticks,
            bytes(
                [
                    0xFF, 0x51, 0x03,
                    (micros_per_quarter >> 16) & 0xFF,
                    (micros_per_quarter >> 8) & 0xFF,
                    micros_per_quarter & 0xFF,
                ]
            ),
        )

    def add_end_of_track(self, deltaticks: int, track_number: int) -> None:
        self.add_event(deltaticks, bytes([0xFF, 0x2F, track_number]))

    def add_sequence_number(self, deltaticks: int, sequence_number: int) -> None:
        self.add_event(deltaticks, bytes([0xFF, 0x00, sequence_number]))

    def add_sysex(self, deltaticks: int, data: bytes) -> None:
        self.add_event(deltaticks, b"\xf0" + bytes(data))

    def add_meta_text(self, deltaticks: int, text_type: int, text: Union[str, bytes]) -> None:
        raw = text.encode("utf-8") if isinstance(text, str) else bytes(text)
        self.add_event(deltaticks, bytes([0xFF, text_type]) + raw)

    def add_text_event(self, deltaticks: int, text: Union[str, bytes]) -> None:
        self.add_meta_text(deltaticks, 0x01, text)

    def add_copyright_notice(self, deltaticks: int, text: Union[str, bytes]) -> None:
        self.add_meta_text(deltaticks, 0x02, text)

    def add_track_name(self, deltaticks: int, text: Union[str, bytes]) -> None:
        self.add_meta_text(deltaticks, 0x03, text)

    def add_instrument_name(self, deltaticks: int, text: Union[str, bytes]) -> None:
        self.add_meta_text(deltaticks, 0x04, text)

    def add_lyric_text(self, deltaticks: int, text: Union[str, bytes]) -> None:
        self.add_meta_text(deltaticks, 0x05, text)

    def add_marker_text(self, deltaticks: int, text: Union[str, bytes]) -> None:
        self.add_meta_text(deltaticks, 0x06, text)

    def add_cue_point_text(self, deltaticks: int, text: Union[str, bytes]) -> None:
        self.add_meta_text(deltaticks, 0x07, text)