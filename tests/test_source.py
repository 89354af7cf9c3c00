import wave

import pytest

from lutrokit.source import SAMPLE_RATE, Source, SoundData, SourceState


def _write_wav(path, frames, channels=1):
    with wave.open(str(path), "wb") as out:
        out.setnchannels(channels)
        out.setsampwidth(2)
        out.setframerate(SAMPLE_RATE)
        out.writeframes(b"\x00\x00" * frames * channels)
    return path


def test_sound_source_starts_stopped_and_playable():
    source = Source(SoundData([0.0] * 10))
    assert source.is_stopped()
    assert not source.is_playing()
    assert source.is_playable()
    assert source.tell() == 0
    assert source.volume == 1.0
    assert source.loop is False


def test_sound_data_counts_frames():
    sound = SoundData([0.0] * 20, channels=2)
    assert sound.num_samples == 10


def test_sound_data_rejects_bad_channels():
    with pytest.raises(ValueError):
        SoundData([0.0] * 6, channels=3)


def test_sound_data_rejects_partial_frame():
    with pytest.raises(ValueError):
        SoundData([0.0] * 5, channels=2)


def test_missing_wav_is_not_playable(tmp_path):
    source = Source(tmp_path / "missing.wav")
    assert not source.is_playable()


def test_unknown_extension_is_not_playable(tmp_path):
    path = tmp_path / "noise.txt"
    path.write_text("hello")
    assert not Source(path).is_playable()


def test_bad_media_type():
    with pytest.raises(TypeError):
        Source(42)


def test_pause_leaves_stopped_source_stopped():
    source = Source(SoundData([0.0] * 4))
    source.pause()
    assert source.is_stopped()


def test_pause_playing_source():
    source = Source(SoundData([0.0] * 4))
    source.state = SourceState.PLAYING
    source.pause()
    assert source.is_paused()
    assert source.state is SourceState.PAUSED


def test_seek_clamps_to_sound_length():
    source = Source(SoundData([0.0] * 50))
    source.seek(500)
    assert source.tell() == 50
    source.seek(20, "samples")
    assert source.tell("samples") == 20


def test_seek_seconds_round_trip():
    source = Source(SoundData([0.0] * (SAMPLE_RATE * 2)))
    source.seek(1.5, "seconds")
    assert source.tell("seconds") == 1.5


def test_seek_invalid_unit():
    source = Source(SoundData([0.0] * 4))
    with pytest.raises(ValueError):
        source.seek(1, "bytes")


def test_tell_invalid_unit():
    source = Source(SoundData([0.0] * 4))
    with pytest.raises(ValueError):
        source.tell("bytes")


def test_seek_negative_raises():
    source = Source(SoundData([0.0] * 4))
    with pytest.raises(ValueError):
        source.seek(-1)


def test_wav_source_seek_and_tell(tmp_path):
    source = Source(_write_wav(tmp_path / "tone.wav", 100))
    assert source.is_playable()
    source.seek(40)
    assert source.tell() == 40
    source.seek(1000)
    assert source.tell() == 100
    source.close()
    assert not source.is_playable()


def test_close_sound_source():
    source = Source(SoundData([0.0] * 4))
    source.close()
    assert source.sound is None
    assert not source.is_playable()