import io
import pickle

import pytest

from plugins.pcm_info.decoder import decode, decode_bytes
from plugins.pcm_info.errors import (
    DecodeError,
    InvalidChunkID,
    InvalidContainerEnvelope,
    InvalidContainerFormat,
    InvalidFORMChunkFormat,
    InvalidRIFFChunkFormat,
    InvalidSampleRate,
    ShortRead,
)
from plugins.pcm_info.extended import encode_extended

from wav_fixtures import aiff_file, chunk, comm_chunk, comm_payload, fmt_chunk, wave_file


def _capture(data):
    err_info = bytearray(4)
    with pytest.raises(DecodeError) as excinfo:
        decode_bytes(data, err_info)
    return excinfo.value, bytes(err_info)


# ------------------------------------------------------------
# Envelope
# ------------------------------------------------------------
@pytest.mark.parametrize("length", range(12))
def test_truncated_envelope_is_always_short_read(length):
    data = wave_file(fmt_chunk())[:length]
    err, ident = _capture(data)
    assert type(err) is ShortRead
    assert ident == b"void"


def test_truncated_aiff_envelope_is_short_read():
    err, _ = _capture(aiff_file(comm_chunk())[:11])
    assert type(err) is ShortRead


def test_unknown_magic():
    data = b"RIFX" + wave_file(fmt_chunk())[4:]
    err, ident = _capture(data)
    assert isinstance(err, InvalidContainerEnvelope)
    assert isinstance(err, InvalidChunkID)
    assert err.kind == "InvalidContainerEnvelope"
    assert ident == b"RIFX"
    assert err.ident == b"RIFX"


def test_riff_with_aiff_tag_is_format_error_not_envelope_error():
    err, ident = _capture(wave_file(fmt_chunk(), tag=b"AIFF"))
    assert isinstance(err, InvalidContainerFormat)
    assert isinstance(err, InvalidRIFFChunkFormat)
    assert not isinstance(err, InvalidContainerEnvelope)
    assert ident == b"AIFF"


def test_form_with_wave_tag():
    err, ident = _capture(aiff_file(comm_chunk(), tag=b"WAVE"))
    assert isinstance(err, InvalidFORMChunkFormat)
    assert ident == b"WAVE"


def test_aifc_is_rejected():
    err, ident = _capture(aiff_file(comm_chunk(), tag=b"AIFC"))
    assert isinstance(err, InvalidFORMChunkFormat)
    assert ident == b"AIFC"


# ------------------------------------------------------------
# Chunk walk
# ------------------------------------------------------------
def test_data_before_fmt_is_invalid_chunk_id():
    err, ident = _capture(wave_file(chunk(b"data", bytes(8)), fmt_chunk()))
    assert type(err) is InvalidChunkID
    assert ident == b"data"


def test_non_ascii_chunk_id_is_captured_raw():
    err, ident = _capture(wave_file(chunk(b"\xff\x00\x10Z", b""), fmt_chunk()))
    assert type(err) is InvalidChunkID
    assert ident == b"\xff\x00\x10Z"


@pytest.mark.parametrize("ident", [b"fmt ", b"bext", b"id3 ", b"Fake", b"JUNK", b"SSND"])
def test_wave_only_and_unknown_chunks_rejected_in_aiff(ident):
    data = aiff_file(chunk(ident, bytes(16), byte_order=">"), comm_chunk())
    err, captured = _capture(data)
    assert type(err) is InvalidChunkID
    assert captured == ident


@pytest.mark.parametrize("ident", [b"COMM", b"COMT", b"INST", b"MARK"])
def test_aiff_only_chunks_rejected_in_wave(ident):
    data = wave_file(chunk(ident, bytes(18)), fmt_chunk())
    err, captured = _capture(data)
    assert type(err) is InvalidChunkID
    assert captured == ident


def test_chunk_ids_are_case_sensitive():
    err, captured = _capture(wave_file(chunk(b"junk", b""), fmt_chunk()))
    assert type(err) is InvalidChunkID
    assert captured == b"junk"


def test_no_chunks_after_envelope_is_short_read():
    err, ident = _capture(wave_file())
    assert type(err) is ShortRead
    assert ident == b"void"


def test_partial_chunk_header_is_short_read():
    err, _ = _capture(wave_file(b"fmt \x10\x00"))
    assert type(err) is ShortRead


def test_skippable_chunk_then_end_of_stream():
    err, _ = _capture(wave_file(chunk(b"JUNK", bytes(4))))
    assert type(err) is ShortRead


def test_forged_skip_size_past_end_of_file():
    data = wave_file(b"JUNK" + (0xFFFFFFF0).to_bytes(4, "little") + bytes(12) + fmt_chunk())
    err, _ = _capture(data)
    assert type(err) is ShortRead


def test_missing_padding_byte_is_short_read():
    # Odd JUNK chunk at the very end without its pad byte
    data = wave_file(chunk(b"JUNK", b"abc", pad=False))
    err, _ = _capture(data)
    assert type(err) is ShortRead


# ------------------------------------------------------------
# Field extraction
# ------------------------------------------------------------
def test_truncated_fmt_payload():
    data = wave_file(b"fmt " + (16).to_bytes(4, "little") + bytes(10))
    err, ident = _capture(data)
    assert type(err) is ShortRead
    assert ident == b"void"


def test_truncated_comm_payload():
    data = aiff_file(b"COMM" + (18).to_bytes(4, "big") + comm_payload()[:17])
    err, _ = _capture(data)
    assert type(err) is ShortRead


def test_negative_aiff_rate():
    raw = encode_extended(44100)
    negative = bytes([raw[0] | 0x80]) + raw[1:]
    err, ident = _capture(aiff_file(comm_chunk(rate_bytes=negative)))
    assert type(err) is InvalidSampleRate
    assert ident == b"void"


def test_infinite_aiff_rate():
    err, _ = _capture(aiff_file(comm_chunk(rate_bytes=bytes.fromhex("7FFF8000000000000000"))))
    assert type(err) is InvalidSampleRate


def test_aiff_rate_wider_than_32_bits():
    err, _ = _capture(aiff_file(comm_chunk(sample_rate=2**32)))
    assert type(err) is InvalidSampleRate


# ------------------------------------------------------------
# err_info handling
# ------------------------------------------------------------
def test_err_info_is_optional():
    with pytest.raises(InvalidChunkID) as excinfo:
        decode(io.BytesIO(wave_file(chunk(b"LIST", b""), fmt_chunk())))
    assert excinfo.value.ident == b"LIST"


def test_err_info_too_small():
    with pytest.raises(ValueError):
        decode_bytes(wave_file(fmt_chunk()), bytearray(3))


def test_err_info_keeps_its_length():
    err_info = bytearray(b"12345678")
    with pytest.raises(InvalidChunkID):
        decode_bytes(wave_file(chunk(b"data", b""), fmt_chunk()), err_info)
    assert bytes(err_info) == b"data5678"


def test_error_survives_pickling():
    err = InvalidChunkID("unexpected", ident=b"data")
    clone = pickle.loads(pickle.dumps(err))
    assert type(clone) is InvalidChunkID
    assert clone.ident == b"data"
