"""Public testing utilities for the sequential study flow.

Provides an in-memory rendering surface and a recording sleep so sessions
can be driven without a browser or real delays.
"""

from sequential_study.testing.recording_surface import RecordingSleep, RecordingSurface

__all__ = ["RecordingSurface", "RecordingSleep"]
