import struct

import pytest

from lutrokit.decoder import WavDecoder, WavFormatError, WavHeader


def make_wav(path, data, channels, bits, rate=44100, fmt_extra=b"", chunks_before=()):
    block = channels * ((bits + 7) // 8)
    fmt = struct.pack("<HHIIHH", 1, channels, rate, rate * block, block, bits) + fmt_extra
    body = b"WAVE" + b"fmt " + struct.pack("<I", len(fmt)) + fmt
    for chunk_id, payload in chunks_before:
        body += chunk_id + struct.pack("<I", len(payload)) + payload
    body += b"data" + struct.pack("<I", len(data)) + data
    path.write_bytes(b"RIFF" + struct.pack("<I", len(body)) + body)
    return path


def pcm16(*samples):
    return struct.pack(f"<{len(samples)}h", *samples)


def decode_all(path, frames, channels, volume=1.0, loop=False, prefill=0.0):
    buffer = [prefill] * (frames * channels)
    with WavDecoder(path) as dec:
        finished = dec.decode(buffer, channels, volume, loop)
        position = dec.tell()
    return buffer, finished, position


def test_header_fields(tmp_path):
    path = make_wav(tmp_path / "a.wav", pcm16(1, 2, 3, 4), channels=2, bits=16, rate=22050)
    with WavDecoder(path) as dec:
        assert isinstance(dec.header, WavHeader)
        assert dec.header.num_channels == 2
        assert dec.header.bits_per_sample == 16
        assert dec.header.sample_rate == 22050
        assert dec.data_size == 8
        assert dec.sample_count() == 2


def test_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        WavDecoder(tmp_path / "nope.wav")


def test_not_riff(tmp_path):
    path = tmp_path / "bad.wav"
    path.write_bytes(b"JUNK" + bytes(60))
    with pytest.raises(WavFormatError):
        WavDecoder(path)


def test_truncated_header(tmp_path):
    path = tmp_path / "short.wav"
    path.write_bytes(b"RIFF\x00\x00\x00\x00WAVE")
    with pytest.raises(WavFormatError):
        WavDecoder(path)


def test_small_fmt_chunk_rejected(tmp_path):
    path = make_wav(tmp_path / "a.wav", pcm16(1), channels=1, bits=16)
    raw = bytearray(path.read_bytes())
    raw[16:20] = struct.pack("<I", 12)
    path.write_bytes(bytes(raw))
    with pytest.raises(WavFormatError):
        WavDecoder(path)


def test_missing_data_chunk(tmp_path):
    path = make_wav(tmp_path / "a.wav", b"", channels=1, bits=16)
    raw = path.read_bytes()
    path.write_bytes(raw[:-8])
    with pytest.raises(WavFormatError):
        WavDecoder(path)


def test_extra_fmt_bytes_and_other_chunks_skipped(tmp_path):
    plain = make_wav(tmp_path / "plain.wav", pcm16(10, -20, 30), channels=1, bits=16)
    fancy = make_wav(
        tmp_path / "fancy.wav",
        pcm16(10, -20, 30),
        channels=1,
        bits=16,
        fmt_extra=b"\x00\x00",
        chunks_before=[(b"LIST", b"abcdef")],
    )
    expected, _, _ = decode_all(plain, 3, 1)
    got, finished, _ = decode_all(fancy, 3, 1)
    assert got == expected
    assert finished is False


def test_full_scale_sample_normalises(tmp_path):
    path = make_wav(tmp_path / "a.wav", pcm16(32767, 0), channels=1, bits=16)
    buffer, _, _ = decode_all(path, 2, 1)
    assert buffer[0] == pytest.approx(1.0)
    assert buffer[1] == 0.0


def test_eight_bit_matches_sixteen_bit_scale(tmp_path):
    eight = make_wav(tmp_path / "e.wav", bytes([0, 128]), channels=1, bits=8)
    sixteen = make_wav(tmp_path / "s.wav", pcm16(-16384, 0), channels=1, bits=16)
    a, _, _ = decode_all(eight, 2, 1)
    b, _, _ = decode_all(sixteen, 2, 1)
    assert a == pytest.approx(b)


def test_mono_to_stereo_duplicates(tmp_path):
    path = make_wav(tmp_path / "a.wav", pcm16(100, -200), channels=1, bits=16)
    mono, _, _ = decode_all(path, 2, 1)
    stereo, _, _ = decode_all(path, 2, 2)
    assert stereo[0::2] == mono
    assert stereo[1::2] == mono


def test_stereo_to_mono_sums(tmp_path):
    path = make_wav(tmp_path / "a.wav", pcm16(100, 300, -50, 25), channels=2, bits=16)
    stereo, _, _ = decode_all(path, 2, 2)
    mono, _, _ = decode_all(path, 2, 1)
    assert mono == pytest.approx([stereo[0] + stereo[1], stereo[2] + stereo[3]])


def test_volume_scales(tmp_path):
    path = make_wav(tmp_path / "a.wav", pcm16(1000, -3000, 500), channels=1, bits=16)
    full, _, _ = decode_all(path, 3, 1, volume=1.0)
    half, _, _ = decode_all(path, 3, 1, volume=0.5)
    assert half == pytest.approx([v / 2 for v in full])


def test_decode_adds_into_buffer(tmp_path):
    path = make_wav(tmp_path / "a.wav", pcm16(1000, -3000), channels=1, bits=16)
    clean, _, _ = decode_all(path, 2, 1)
    mixed, _, _ = decode_all(path, 2, 1, prefill=0.25)
    assert mixed == pytest.approx([v + 0.25 for v in clean])


def test_exact_length_not_finished(tmp_path):
    path = make_wav(tmp_path / "a.wav", pcm16(1, 2, 3), channels=1, bits=16)
    _, finished, position = decode_all(path, 3, 1)
    assert finished is False
    assert position == 3


def test_end_without_loop_finishes(tmp_path):
    path = make_wav(tmp_path / "a.wav", pcm16(100, 200, 300), channels=1, bits=16)
    reference, _, _ = decode_all(path, 3, 1)
    buffer, finished, position = decode_all(path, 5, 1)
    assert finished is True
    assert buffer[:3] == reference
    assert buffer[3:] == [0.0, 0.0]
    assert position == 3


def test_loop_wraps_around(tmp_path):
    path = make_wav(tmp_path / "a.wav", pcm16(100, 200, 300), channels=1, bits=16)
    reference, _, _ = decode_all(path, 3, 1)
    buffer, finished, position = decode_all(path, 7, 1, loop=True)
    assert finished is False
    assert buffer == reference + reference + reference[:1]
    assert position == 1


def test_loop_on_empty_data_finishes(tmp_path):
    path = make_wav(tmp_path / "a.wav", b"", channels=1, bits=16)
    buffer, finished, _ = decode_all(path, 4, 1, loop=True)
    assert finished is True
    assert buffer == [0.0] * 4


def test_unsupported_bit_depth(tmp_path):
    path = make_wav(tmp_path / "a.wav", bytes(6), channels=1, bits=24)
    buffer, finished, _ = decode_all(path, 2, 1)
    assert finished is True
    assert buffer == [0.0, 0.0]


def test_seek_and_tell_round_trip(tmp_path):
    path = make_wav(tmp_path / "a.wav", pcm16(1, 2, 3, 4, 5, 6), channels=2, bits=16)
    with WavDecoder(path) as dec:
        assert dec.tell() == 0
        dec.seek(2)
        assert dec.tell() == 2
        dec.seek(0)
        assert dec.tell() == 0


def test_seek_past_end_clamps(tmp_path):
    path = make_wav(tmp_path / "a.wav", pcm16(1, 2, 3), channels=1, bits=16)
    with WavDecoder(path) as dec:
        dec.seek(100)
        assert dec.tell() == dec.sample_count()
        buffer = [0.0, 0.0]
        assert dec.decode(buffer, 1, 1.0, False) is True
        assert buffer == [0.0, 0.0]


def test_seek_negative_rejected(tmp_path):
    path = make_wav(tmp_path / "a.wav", pcm16(1, 2), channels=1, bits=16)
    with WavDecoder(path) as dec:
        with pytest.raises(ValueError):
            dec.seek(-1)


def test_seek_changes_decoded_frames(tmp_path):
    path = make_wav(tmp_path / "a.wav", pcm16(100, 200, 300), channels=1, bits=16)
    reference, _, _ = decode_all(path, 3, 1)
    with WavDecoder(path) as dec:
        dec.seek(2)
        buffer = [0.0]
        dec.decode(buffer, 1, 1.0, False)
    assert buffer == [reference[2]]


def test_close_via_context_manager(tmp_path):
    path = make_wav(tmp_path / "a.wav", pcm16(1), channels=1, bits=16)
    with WavDecoder(path) as dec:
        assert dec.tell() == 0
    with pytest.raises(ValueError):
        dec.tell()