"""Call recording."""

from fakecheck.application.recording.call_recorder import CallRecorder

__all__ = ["CallRecorder"]
