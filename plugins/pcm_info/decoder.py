"""
decoder.py
----------

Chunk-walking header decoder for RIFF/WAVE and FORM/AIFF files.

Handles:
- Outer envelope validation (magic, size, format tag)
- Chunk header iteration in the family's byte order
- Per-family dispatch: target chunk, skippable chunks, everything else rejected
- Field extraction from the WAVE "fmt " and AIFF "COMM" chunks

Every function assumes the stream is already positioned where its part of
the file starts (offset 0 for the envelope, the start of a chunk header for
next_chunk, the start of a payload for the extractors).

Audio samples are never read.
"""

import io
import os
import struct
from dataclasses import dataclass

from .chunks import (
    CHUNK_HEADER_SIZE,
    ENVELOPE_MAGIC,
    ENVELOPE_SIZE,
    ChunkAction,
    ContainerFormat,
    classify_chunk,
)
from .errors import (
    IDENT_SIZE,
    VOID_IDENT,
    DecodeError,
    InvalidChunkID,
    InvalidContainerEnvelope,
    InvalidFORMChunkFormat,
    InvalidRIFFChunkFormat,
    InvalidSampleRate,
    ShortRead,
)
from .extended import extended_to_int

# Only the leading fields of the target chunks are needed
FMT_READ_SIZE = 16
COMM_READ_SIZE = 18

MAX_U32 = 0xFFFFFFFF

_DISCARD_BLOCK = 64 * 1024

_FORMAT_ERRORS = {
    ContainerFormat.WAVE: InvalidRIFFChunkFormat,
    ContainerFormat.AIFF: InvalidFORMChunkFormat,
}


# ------------------------------------------------------------
# Value types
# ------------------------------------------------------------
@dataclass(frozen=True)
class PCMInfo:
    """Format triple of a PCM audio file."""
    sample_rate: int
    bit_depth: int
    channels: int


@dataclass(frozen=True)
class Envelope:
    container: ContainerFormat
    # Declared outer size; never checked against the real stream length
    size: int


@dataclass(frozen=True)
class ChunkHeader:
    id: bytes
    size: int

    @property
    def padded_size(self):
        """Payload size rounded up to the next even number of bytes."""
        return self.size + (self.size & 1)


# ------------------------------------------------------------
# Byte helpers
# ------------------------------------------------------------
def read_u16(buf, offset, byte_order):
    return struct.unpack_from(byte_order + "H", buf, offset)[0]


def read_u32(buf, offset, byte_order):
    return struct.unpack_from(byte_order + "I", buf, offset)[0]


def read_exact(source, size):
    """
    Read exactly `size` bytes, looping over short reads.

    Raises ShortRead when the stream ends first.
    """
    buf = bytearray()
    while len(buf) < size:
        block = source.read(size - len(buf))
        if not block:
            break
        buf += block

    if len(buf) < size:
        raise ShortRead(f"needed {size} bytes, got {len(buf)}")
    return bytes(buf)


def skip_bytes(source, count):
    """
    Advance the stream by `count` bytes.

    Seekable streams are checked against their real length first, so a
    forged chunk size cannot move the cursor past end of file.
    """
    if count <= 0:
        return

    seekable = getattr(source, "seekable", None)
    if seekable is not None and seekable():
        pos = source.tell()
        end = source.seek(0, os.SEEK_END)
        if pos + count > end:
            raise ShortRead(f"cannot skip {count} bytes, only {end - pos} left")
        source.seek(pos + count)
        return

    remaining = count
    while remaining:
        block = source.read(min(remaining, _DISCARD_BLOCK))
        if not block:
            raise ShortRead(f"cannot skip {count} bytes, only {count - remaining} left")
        remaining -= len(block)


# ------------------------------------------------------------
# Envelope
# ------------------------------------------------------------
def validate_envelope(source):
    """
    Read the 12-byte RIFF/FORM prefix and return the Envelope.

    Raises:
        ShortRead, InvalidContainerEnvelope,
        InvalidRIFFChunkFormat / InvalidFORMChunkFormat
    """
    buf = read_exact(source, ENVELOPE_SIZE)

    magic = buf[0:4]
    container = ENVELOPE_MAGIC.get(magic)
    if container is None:
        raise InvalidContainerEnvelope(f"unknown container magic {magic!r}", ident=magic)

    tag = buf[8:12]
    if tag != container.format_tag:
        raise _FORMAT_ERRORS[container](
            f"{magic.decode('latin-1')} container with format {tag!r}",
            ident=tag,
        )

    return Envelope(container=container, size=read_u32(buf, 4, container.byte_order))


# ------------------------------------------------------------
# Chunk walking
# ------------------------------------------------------------
def next_chunk(source, container):
    """Read one 8-byte chunk header in the family's byte order."""
    buf = read_exact(source, CHUNK_HEADER_SIZE)
    return ChunkHeader(id=buf[0:4], size=read_u32(buf, 4, container.byte_order))


def skip_chunk(source, header):
    """Skip a chunk payload plus its padding byte when the size is odd."""
    skip_bytes(source, header.padded_size)


# ------------------------------------------------------------
# Field extractors
# ------------------------------------------------------------
def read_fmt_chunk(source):
    """
    WAVE "fmt " payload, little-endian:
        0-1 format tag (ignored), 2-3 channels, 4-7 sample rate,
        8-11 byte rate, 12-13 block align, 14-15 bits per sample
    Extension bytes past offset 16 are never read.
    """
    buf = read_exact(source, FMT_READ_SIZE)
    return PCMInfo(
        sample_rate=read_u32(buf, 4, "<"),
        bit_depth=read_u16(buf, 14, "<"),
        channels=read_u16(buf, 2, "<"),
    )


def read_comm_chunk(source):
    """
    AIFF "COMM" payload, big-endian:
        0-1 channels, 2-5 sample frames (ignored), 6-7 sample size,
        8-17 sample rate as an 80-bit extended float
    """
    buf = read_exact(source, COMM_READ_SIZE)

    try:
        sample_rate = extended_to_int(buf[8:18])
    except ValueError as e:
        raise InvalidSampleRate(str(e)) from e

    if not 0 <= sample_rate <= MAX_U32:
        raise InvalidSampleRate(f"sample rate {sample_rate} does not fit 32 bits")

    return PCMInfo(
        sample_rate=sample_rate,
        bit_depth=read_u16(buf, 6, ">"),
        channels=read_u16(buf, 0, ">"),
    )


EXTRACTORS = {
    ContainerFormat.WAVE: read_fmt_chunk,
    ContainerFormat.AIFF: read_comm_chunk,
}


# ------------------------------------------------------------
# Public API
# ------------------------------------------------------------
def _walk(source):
    container = validate_envelope(source).container

    while True:
        header = next_chunk(source, container)
        action = classify_chunk(container, header.id)

        if action is ChunkAction.TARGET:
            return EXTRACTORS[container](source)

        if action is ChunkAction.SKIP:
            skip_chunk(source, header)
            continue

        raise InvalidChunkID(
            f"unexpected chunk {header.id!r} in {container.name} file",
            ident=header.id,
        )


def decode(source, err_info=None):
    """
    Decode the format triple from a binary stream positioned at offset 0.

    Args:
        source: readable binary stream (file opened "rb", io.BytesIO, ...)
        err_info: optional bytearray of at least 4 bytes. Set to b"void"
            on entry, then to the offending identifier when an
            identifier-related error is raised.

    Returns:
        PCMInfo

    Raises:
        DecodeError subclasses. The identifier is also on the error as .ident.
    """
    if err_info is not None:
        if len(err_info) < IDENT_SIZE:
            raise ValueError(f"err_info needs at least {IDENT_SIZE} bytes")
        err_info[:IDENT_SIZE] = VOID_IDENT

    try:
        return _walk(source)
    except DecodeError as e:
        if err_info is not None:
            err_info[:IDENT_SIZE] = e.ident
        raise


def decode_bytes(data, err_info=None):
    """Decode an in-memory buffer."""
    return decode(io.BytesIO(data), err_info)


def read_info(path, err_info=None):
    """
    Open `path` read-only and decode it.

    OSError from opening or reading the file propagates unchanged.
    """
    with open(path, "rb") as f:
        return decode(f, err_info)
