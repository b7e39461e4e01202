"""Write a short example MIDI file with two notes."""

from __future__ import annotations

import argparse
from pathlib import Path
from typing import Optional, Sequence, Union

from smfwrite.writer import SmfWriter


def write_example(directory: Union[str, Path]) -> Path:
    """Write the two-note example into ``directory`` and return its path."""
    writer = SmfWriter(directory)
    path = writer.set_filename("test")
    writer.ticks_per_beat = 480
    writer.write_header()
    writer.add_set_tempo(0, 120.0)
    writer.add_note_on_event(0, 1, 64, 127)
    writer.add_note_off_event(480, 1, 64)
    writer.add_note_on_event(480, 1, 64, 127)
    writer.add_note_off_event(480, 1, 64)
    writer.close()
    return path


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Write an example MIDI file.")
    parser.add_argument("directory", nargs="?", default="./output")
    args = parser.parse_args(argv)
    directory = Path(args.directory)
    directory.mkdir(parents=True, exist_ok=True)
    path = write_example(directory)
    print(path)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())