"""Software mixer that renders playing sources into interleaved 16-bit stereo."""

from __future__ import annotations

import logging
from array import array
from collections.abc import Iterable
from typing import Optional

from lutrokit.source import Media, Source, SourceState

_log = logging.getLogger(__name__)

CHANNELS = 2
INT16_MAX = 32767
INT16_MIN = -32768


def _saturate(value: float) -> int:
    if value >= INT16_MAX:
        return INT16_MAX
    if value <= INT16_MIN:
        return INT16_MIN
    return int(value)


class Mixer:
    """Keeps track of playing sources and mixes them one chunk at a time.

    Stopped sources keep their slot until :meth:`unref_stopped` releases it,
    mirroring the deferred cleanup of the playback registry.
    """

    def __init__(self, frames: int = 735) -> None:
        frames = int(frames)
        if frames <= 0:
            raise ValueError(f"frames per render must be positive, got {frames}")
        self.frames = frames
        self._volume = 1.0
        self._slots: list[Optional[Source]] = []

    @property
    def volume(self) -> float:
        """Master volume applied when the mix is converted to 16-bit."""
        return self._volume

    @volume.setter
    def volume(self, value: float) -> None:
        self._volume = float(value)

    def new_source(self, media: Media) -> Source:
        """Create a stopped source for a file path or sound data."""
        return Source(media)

    def play(self, source: Source) -> bool:
        """Start or resume a source; return True if it is playing afterwards."""
        if source.state is SourceState.PLAYING:
            return True
        if not source.is_playable():
            _log.error("Audio source is not playable.")
            source.state = SourceState.STOPPED
            return False
        if source.state is SourceState.PAUSED:
            source.state = SourceState.PLAYING
            return True

        source.state = SourceState.PLAYING
        if any(slot is source for slot in self._slots):
            return True
        for index, slot in enumerate(self._slots):
            if slot is None:
                self._slots[index] = source
                break
        else:
            self._slots.append(source)
        return True

    def stop(self, source: Source) -> None:
        """Stop a source and rewind it to the start."""
        if source.state is SourceState.STOPPED:
            return
        source.position = 0
        source.state = SourceState.STOPPED

    def _sources(self) -> Iterable[Source]:
        return (slot for slot in self._slots if slot is not None)

    def pause(self, *args: Source | Iterable[Source]) -> list[Source]:
        """Pause playing sources and return the ones this call paused.

        With no arguments every playing source is paused; otherwise the given
        sources, or iterables of sources, are considered.
        """
        if not args:
            candidates: list[Source] = list(self._sources())
        else:
            candidates = []
            for arg in args:
                if isinstance(arg, Source):
                    candidates.append(arg)
                else:
                    candidates.extend(arg)
        paused = []
        for source in candidates:
            if source.state is SourceState.PLAYING:
                source.state = SourceState.PAUSED
                paused.append(source)
        return paused

    def stop_all(self) -> None:
        """Stop every registered source; slots are released later."""
        for source in self._sources():
            source.state = SourceState.STOPPED

    def active_sources(self) -> list[Source]:
        """Registered sources that are playing or paused."""
        return [
            source
            for source in self._sources()
            if source.state in (SourceState.PLAYING, SourceState.PAUSED)
        ]

    def active_source_count(self) -> int:
        return len(self.active_sources())

    def unref_stopped(self) -> None:
        """Release the slots of stopped sources."""
        self._slots = [
            None if slot is None or slot.state is SourceState.STOPPED else slot
            for slot in self._slots
        ]

    def _mix_sound(self, source: Source, buffer: list[float]) -> None:
        sound = source.sound
        assert sound is not None
        length = sound.num_samples
        if length == 0:
            source.position = 0
            source.state = SourceState.STOPPED
            return
        volume = source.volume
        total = 0
        while total < self.frames:
            chunk = min(self.frames - total, length - source.position)
            start = source.position
            if sound.channels == 1:
                for offset, sample in enumerate(sound.data[start : start + chunk]):
                    value = sample * volume
                    buffer[(total + offset) * 2] += value
                    buffer[(total + offset) * 2 + 1] += value
            else:
                block = sound.data[start * 2 : (start + chunk) * 2]
                for offset, sample in enumerate(block, total * 2):
                    buffer[offset] += sample * volume
            total += chunk
            source.position += chunk
            if source.position >= length:
                source.position = 0
                if not source.loop:
                    source.state = SourceState.STOPPED
                    break

    def render(self) -> array:
        """Mix one chunk of all playing sources into interleaved int16 stereo."""
        buffer = [0.0] * (self.frames * CHANNELS)
        for source in list(self._sources()):
            if source.state is not SourceState.PLAYING:
                continue
            if source.wav is not None:
                source.wav.seek(source.position)
                if source.wav.decode(buffer, CHANNELS, source.volume, source.loop):
                    source.wav.seek(0)
                    source.state = SourceState.STOPPED
                source.position = source.wav.tell()
            elif source.sound is not None:
                self._mix_sound(source, buffer)
            else:
                source.state = SourceState.STOPPED

        scale = self._volume * INT16_MAX
        return array("h", (_saturate(value * scale) for value in buffer))