"""Audio sources: streamed WAV files or pre-decoded sound data."""

from __future__ import annotations

import enum
import logging
import os
from dataclasses import dataclass, field
from typing import Union

from lutrokit.decoder import WavDecoder, WavFormatError

_log = logging.getLogger(__name__)

SAMPLE_RATE = 44100

_UNITS = ("samples", "seconds")


class SourceState(enum.IntEnum):
    """Playback state of a source."""

    STOPPED = 0
    PAUSED = 1
    PLAYING = 2


@dataclass
class SoundData:
    """Pre-decoded audio: interleaved float samples in the range -1.0 to 1.0."""

    data: list[float] = field(default_factory=list)
    channels: int = 1

    def __post_init__(self) -> None:
        if self.channels not in (1, 2):
            raise ValueError(f"sound data must have 1 or 2 channels, got {self.channels}")
        if len(self.data) % self.channels:
            raise ValueError("sound data length is not a whole number of frames")

    @property
    def num_samples(self) -> int:
        """Number of sample frames."""
        return len(self.data) // self.channels


Media = Union[str, "os.PathLike[str]", SoundData]


class Source:
    """A playable sound: either a streamed file or shared sound data."""

    def __init__(self, media: Media) -> None:
        self.wav: WavDecoder | None = None
        self.sound: SoundData | None = None
        if isinstance(media, SoundData):
            self.sound = media
        elif isinstance(media, (str, os.PathLike)):
            self._open(os.fspath(media))
        else:
            raise TypeError(
                f"a source needs a file path or SoundData, not {type(media).__name__}"
            )
        self.loop = False
        self.volume = 1.0
        self.pitch = 1.0
        self.position = 0
        self.state = SourceState.STOPPED

    def _open(self, path: str) -> None:
        extension = os.path.splitext(path)[1]
        if "ogg" in extension:
            _log.error("vorbis streaming is not available for %s", path)
        if "wav" in extension:
            try:
                self.wav = WavDecoder(path)
            except FileNotFoundError:
                _log.warning("wavfile not found: %s", path)
            except WavFormatError as exc:
                _log.error("%s", exc)
            except OSError as exc:
                _log.error("Failed to open wavfile '%s': %s", path, exc.strerror)

    def is_playable(self) -> bool:
        """True if the source has audio to play."""
        return self.wav is not None or self.sound is not None

    def is_playing(self) -> bool:
        return self.state is SourceState.PLAYING

    def is_paused(self) -> bool:
        return self.state is SourceState.PAUSED

    def is_stopped(self) -> bool:
        return self.state is SourceState.STOPPED

    def pause(self) -> None:
        """Pause the source unless it is stopped."""
        if self.state is not SourceState.STOPPED:
            self.state = SourceState.PAUSED

    def tell(self, unit: str | None = None) -> int | float:
        """Current position, in samples (default) or seconds."""
        if unit is None or unit == "samples":
            return self.position
        if unit == "seconds":
            return self.position / float(SAMPLE_RATE)
        raise ValueError(
            f"Source:tell '{unit}' given for unit. Expected either 'seconds' or 'samples'"
        )

    @staticmethod
    def _to_samples(position: int | float, unit: str | None) -> int:
        if unit == "seconds":
            samples = int(position * float(SAMPLE_RATE))
        elif unit is None or unit == "samples":
            if isinstance(position, float) and not position.is_integer():
                raise ValueError(f"sample position must be an integer, got {position}")
            samples = int(position)
        else:
            raise ValueError(
                f"Source:seek '{unit}' given for unit. "
                "Expected either 'seconds' or 'samples'"
            )
        if samples < 0:
            raise ValueError(f"cannot seek to negative sample position {samples}")
        return samples

    def seek(self, position: int | float, unit: str | None = None) -> None:
        """Move the play position; the media may clamp it to its length."""
        samples = self._to_samples(position, unit)
        if self.wav is not None:
            self.wav.seek(samples)
            self.position = self.wav.tell()
        if self.sound is not None:
            self.position = min(samples, self.sound.num_samples)
        if samples != self.position:
            _log.warning(
                "seek asked for sample pos %d, got pos %d", samples, self.position
            )

    def close(self) -> None:
        """Release the streamed file and the sound data."""
        if self.wav is not None:
            self.wav.close()
            self.wav = None
        self.sound = None