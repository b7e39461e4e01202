# smfwrite

Write Standard MIDI Files (format 0, one track) one event at a time.
Events are buffered in memory and appended to the file once the buffer
holds more than 1000 bytes, or when `flush` is called. Closing the writer
flushes the buffer and patches the track length into the track header.

The package also provides `DeltaTimeSequencer`, which turns a running
microsecond clock into MIDI delta ticks (with pause and resume), and
`MidiRecorder`, which ties the two together for recording MIDI events
handed to it.

## Installation

```
pip install smfwrite
```

No third-party dependencies are needed.

## Writing a file

```python
from smfwrite.writer import SmfWriter

with SmfWriter("output") as writer:
    path = writer.set_filename("test")   # test.mid, or test1.mid, test2.mid, ... if taken
    writer.write_header()
    writer.add_set_tempo(0, 120.0)
    writer.add_note_on_event(0, 1, 64, 127)
    writer.add_note_off_event(480, 1, 64)
```

`SmfWriter(directory)` writes into `directory` (the current directory by
default). `set_filename` creates the file and returns its path, which is
also available as `writer.filename`; `writer.bytes_written` counts the
bytes appended since then. Leaving the `with` block calls `close`.

The header's resolution comes from `writer.ticks_per_beat` (480 by
default); set it before `write_header`. `microseconds_per_tick(bpm)`
gives the tick length at a tempo with that resolution.

Besides notes, the writer supports:

- `add_program_change`, `add_control_change`
- `add_pitch_bend` (a signed integer, or a float scaled by 0x2000)
- `add_after_touch` (channel) and `add_poly_after_touch`
- `add_key_signature`, `add_time_signature`, `add_smpte_offset`
- `add_set_tempo` (beats per minute), `add_sequence_number`, `add_end_of_track`
- `add_sysex` (an `F0` byte followed by the given data)
- `add_meta_text` and the text meta events `add_text_event`,
  `add_copyright_notice`, `add_track_name`, `add_instrument_name`,
  `add_lyric_text`, `add_marker_text`, `add_cue_point_text`
  (strings are encoded as UTF-8; bytes are written as given)

`add_event(deltaticks, data)` writes any raw event bytes after the
variable-length delta time. A delta outside 0 to 0x0FFFFFFF raises
`ValueError`.

`SmfWriteError` (a subclass of `OSError`) is raised when the file cannot
be created, appended to or patched, or when buffered data is flushed
before a file name has been set.

## Timing live input

```python
from smfwrite.sequencer import DeltaTimeSequencer

seq = DeltaTimeSequencer.from_tempo(120.0, 480, True)
delta = seq.get_delta(now_in_microseconds)
```

`DeltaTimeSequencer(micros_per_tick, start_timing_on_first_event)` takes
a positive tick length; `calculate_micros_per_tick(bpm, ticks_per_beat)`
computes one, truncated to a whole number. A start time of zero means the
clock is not running: the first `get_delta` then starts it, and returns 0
when `start_timing_on_first_event` is set. `start` and `stop` set and
clear the clock explicitly.

`pause` and `unpause` stop time from advancing; ticks that had elapsed
before the pause are reported by the next call to `get_delta`.
`microseconds(now)` gives the time since the start (frozen while paused),
and `inactivity_micros(now)` the time since the tick of the last event.

## Recording

```python
from smfwrite.recorder import MidiRecorder
from smfwrite.writer import SmfWriter

recorder = MidiRecorder(SmfWriter("output"))
recorder.handle_note_on(0, 60, 100)
recorder.handle_note_off(0, 60, 0)
recorder.poll(had_activity=True)
```

`MidiRecorder(writer, tempo=120.0, resolution=480, clock=None,
basename="test", inactivity_micros=10_000_000)` starts its first file on
construction: a header and a tempo event. Its handlers
(`handle_note_on`, `handle_note_off`, `handle_after_touch_poly`,
`handle_control_change`, `handle_program_change`,
`handle_after_touch_channel`, `handle_pitch_bend`) write each event with
a delta taken from the clock, a callable returning microseconds
(a monotonic clock by default).

Call `poll(had_activity)` regularly. Once more than `inactivity_micros`
have passed since the last activity, it calls `reset`, which closes the
current file and starts a new one, and returns `True`.

## What the package does not do

It does not read from MIDI ports or devices. `MidiRecorder` only records
the events passed to its handlers; connecting it to a live MIDI input
is left to the caller.

## Example command

```
smfwrite-example [directory]
```

writes a short file with a tempo event and two notes into `directory`
(`./output` by default, created if missing) and prints its path.

## Running the tests

```
pip install smfwrite[test]
pytest
```