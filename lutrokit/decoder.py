"""Streaming WAV decoding into a floating-point mixing buffer."""

from __future__ import annotations

import logging
import os
import struct
import sys
from array import array
from dataclasses import dataclass
from typing import BinaryIO, MutableSequence, Sequence

_log = logging.getLogger(__name__)

HEADER_CHUNK1_SIZE = 36
HEADER_CHUNK2_SIZE = 8

_HEADER = struct.Struct("<4sI4s4sIHHIIHH")
_CHUNK = struct.Struct("<4sI")

# 16-bit samples span -32768..32767; 8-bit samples are scaled to 16-bit range
# first, and both are normalised with the same divisor.
_NORMALIZE = 32767


class WavFormatError(ValueError):
    """Raised when a file is not a WAV file this decoder can stream."""


@dataclass(frozen=True)
class WavHeader:
    """The RIFF header together with the ``fmt `` subchunk."""

    chunk_id: bytes
    chunk_size: int
    format: bytes
    subchunk1_id: bytes
    subchunk1_size: int
    audio_format: int
    num_channels: int
    sample_rate: int
    byte_rate: int
    block_align: int
    bits_per_sample: int


def _read_layout(stream: BinaryIO, path: object) -> tuple[WavHeader, int, int]:
    """Parse the header and locate the data subchunk; return header, offset, size."""
    raw = stream.read(HEADER_CHUNK1_SIZE)
    if len(raw) < HEADER_CHUNK1_SIZE:
        raise WavFormatError(f"{path} is not a valid wav file or is truncated.")
    header = WavHeader(*_HEADER.unpack(raw))
    if (
        header.chunk_id != b"RIFF"
        or header.format != b"WAVE"
        or header.subchunk1_id != b"fmt "
    ):
        raise WavFormatError(f"{path} is not a valid wav file or is truncated.")
    if header.subchunk1_size < 16:
        raise WavFormatError(
            f"{path} has invalid subchunk size={header.subchunk1_size}. "
            "Expected size >= 16."
        )
    if header.subchunk1_size > 16:
        stream.seek(header.subchunk1_size - 16, os.SEEK_CUR)
    if ((header.bits_per_sample + 7) // 8) * header.num_channels == 0:
        raise WavFormatError(f"{path} declares an empty sample frame.")

    while True:
        raw = stream.read(HEADER_CHUNK2_SIZE)
        if len(raw) < HEADER_CHUNK2_SIZE:
            raise WavFormatError(
                f"{path} is not a supported wav file. No data subchunk was found."
            )
        chunk_id, size = _CHUNK.unpack(raw)
        if chunk_id == b"data":
            return header, stream.tell(), size
        stream.seek(size, os.SEEK_CUR)


class WavDecoder:
    """A WAV file streamed frame by frame and mixed into float buffers."""

    def __init__(self, path: str | os.PathLike[str]) -> None:
        self._file: BinaryIO = open(path, "rb")
        try:
            self.header, self.data_offset, self.data_size = _read_layout(
                self._file, path
            )
        except BaseException:
            self._file.close()
            raise
        self._pos = 0

    @property
    def _frame_size(self) -> int:
        return ((self.header.bits_per_sample + 7) // 8) * self.header.num_channels

    def sample_count(self) -> int:
        """Number of whole sample frames in the data subchunk."""
        return self.data_size // self._frame_size

    def seek(self, sample_pos: int) -> None:
        """Move to a sample frame; positions past the end clamp to the end."""
        sample_pos = min(int(sample_pos), self.sample_count())
        if sample_pos < 0:
            raise ValueError(f"cannot seek to negative sample position {sample_pos}")
        byte_pos = sample_pos * self._frame_size
        if byte_pos == self._pos:
            return
        self._file.seek(self.data_offset + byte_pos)
        self._pos = byte_pos

    def tell(self) -> int:
        """Current read position in sample frames."""
        frame = self._frame_size
        offset = self._file.tell() - self.data_offset
        if offset >= 0 and offset % frame:
            _log.warning(
                "Unaligned read position in wav decoder stream. "
                "size=%d bps=%d channels=%d pos=%d",
                self.data_size,
                self.header.bits_per_sample,
                self.header.num_channels,
                offset,
            )
        return offset // frame

    def _samples(self, raw: bytes) -> Sequence[int]:
        if self.header.bits_per_sample == 8:
            return [(byte - 128) * 128 for byte in raw]
        values = array("h")
        values.frombytes(raw)
        if sys.byteorder == "big":
            values.byteswap()
        return values

    def _mix(
        self,
        buffer: MutableSequence[float],
        first_frame: int,
        channels: int,
        samples: Sequence[int],
        scale: float,
    ) -> None:
        stereo_source = self.header.num_channels == 2
        if stereo_source and channels == 2:
            for index, sample in enumerate(samples, first_frame * 2):
                buffer[index] += sample * scale
        elif stereo_source:
            pairs = zip(samples[0::2], samples[1::2])
            for index, (left, right) in enumerate(pairs, first_frame):
                buffer[index] += left * scale
                buffer[index] += right * scale
        elif channels == 1:
            for index, sample in enumerate(samples, first_frame):
                buffer[index] += sample * scale
        else:
            for index, sample in enumerate(samples, first_frame):
                value = sample * scale
                buffer[index * 2] += value
                buffer[index * 2 + 1] += value

    def decode(
        self,
        buffer: MutableSequence[float],
        channels: int,
        volume: float,
        loop: bool,
    ) -> bool:
        """Add decoded audio into ``buffer``; return True once playback has finished.

        ``buffer`` holds interleaved frames of ``channels`` channels and is mixed
        into, not overwritten. Unsupported formats report finished at once.
        """
        if (
            self.header.bits_per_sample not in (8, 16)
            or self.header.num_channels not in (1, 2)
            or channels not in (1, 2)
        ):
            return True

        scale = volume / _NORMALIZE
        frame = self._frame_size
        wanted = len(buffer) // channels
        written = 0
        just_rewound = False

        while written < wanted:
            remaining = self.data_size - self._pos
            available = -(-remaining // frame) if remaining > 0 else 0
            count = min(wanted - written, available)
            raw = self._file.read(count * frame) if count else b""
            got = len(raw) // frame
            partial = len(raw) % frame
            if partial:
                self._file.seek(-partial, os.SEEK_CUR)
            if got:
                self._mix(buffer, written, channels, self._samples(raw[: got * frame]), scale)
                written += got
                self._pos += got * frame
                just_rewound = False
            if count == 0 or got < count:
                if not loop or just_rewound:
                    return True
                self._pos = 0
                self._file.seek(self.data_offset)
                just_rewound = True
        return False

    def close(self) -> None:
        """Close the underlying file."""
        self._file.close()

    def __enter__(self) -> WavDecoder:
        return self

    def __exit__(self, *args: object) -> None:
        self.close()