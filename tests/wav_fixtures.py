"""In-memory builders for RIFF/WAVE and FORM/AIFF test streams."""

import struct

from plugins.pcm_info.extended import encode_extended


def chunk(ident, payload, byte_order="<", pad=True):
    data = ident + struct.pack(byte_order + "I", len(payload)) + payload
    if pad and len(payload) % 2:
        data += b"\x00"
    return data


def fmt_payload(channels=2, sample_rate=44100, bit_depth=16, format_tag=1, extra=b""):
    block_align = (channels * bit_depth // 8) & 0xFFFF
    byte_rate = (sample_rate * block_align) & 0xFFFFFFFF
    return struct.pack(
        "<HHIIHH", format_tag, channels, sample_rate, byte_rate, block_align, bit_depth
    ) + extra


def comm_payload(channels=1, sample_rate=44100, bit_depth=16, frames=0, rate_bytes=None):
    if rate_bytes is None:
        rate_bytes = encode_extended(sample_rate)
    return struct.pack(">HIH", channels, frames, bit_depth) + rate_bytes


def fmt_chunk(**kwargs):
    return chunk(b"fmt ", fmt_payload(**kwargs))


def comm_chunk(**kwargs):
    return chunk(b"COMM", comm_payload(**kwargs), byte_order=">")


def wave_file(*chunks, outer_size=None, tag=b"WAVE"):
    body = tag + b"".join(chunks)
    size = len(body) if outer_size is None else outer_size
    return b"RIFF" + struct.pack("<I", size) + body


def aiff_file(*chunks, outer_size=None, tag=b"AIFF"):
    body = tag + b"".join(chunks)
    size = len(body) if outer_size is None else outer_size
    return b"FORM" + struct.pack(">I", size) + body
