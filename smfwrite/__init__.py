"""Write Standard MIDI Files event by event, with delta-time sequencing for recording."""

__version__ = "1.0.0"
__all__ = ["basic", "recorder", "sequencer", "writer"]