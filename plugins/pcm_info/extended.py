"""
extended.py
-----------

80-bit IEEE-754 extended precision ("SANE") floats, as stored in the AIFF
COMM chunk sample rate field.

Layout (big-endian, 10 bytes):
    bit 79        sign
    bits 64..78   exponent, bias 16383
    bits 0..63    mantissa with an EXPLICIT integer bit (bit 63)

    value = (-1)**sign * mantissa * 2**(exponent - 16383 - 63)

Precision contract:
- extended_to_int() is exact: it works on the integer mantissa and only
  truncates the fractional part (toward zero).
- decode_extended() returns a binary64 float. It is exact for every value
  whose mantissa fits in 53 bits, which covers all integer sample rates
  below 2**53.
- Exponent 0x7FFF is infinity or NaN. decode_extended() maps both to
  +/-inf (the mantissa is ignored); extended_to_int() rejects them.
- Exponent 0 with a non-zero mantissa is a denormal and uses the minimum
  exponent (1 - 16383).
"""

import math
import struct

EXTENDED_SIZE = 10
EXPONENT_BIAS = 16383
MAX_EXPONENT = 0x7FFF
_MANTISSA_BITS = 64


def _unpack(raw):
    raw = bytes(raw)
    if len(raw) != EXTENDED_SIZE:
        raise ValueError(f"extended float needs {EXTENDED_SIZE} bytes, got {len(raw)}")
    exponent, mantissa = struct.unpack(">HQ", raw)
    negative = bool(exponent & 0x8000)
    return negative, exponent & MAX_EXPONENT, mantissa


def _scale(exponent):
    # Power of two applied to the integer mantissa
    return max(exponent, 1) - EXPONENT_BIAS - (_MANTISSA_BITS - 1)


def decode_extended(raw):
    """Decode 10 big-endian bytes into a Python float."""
    negative, exponent, mantissa = _unpack(raw)
    sign = -1.0 if negative else 1.0

    if exponent == 0 and mantissa == 0:
        return sign * 0.0
    if exponent == MAX_EXPONENT:
        return sign * math.inf

    try:
        return sign * math.ldexp(float(mantissa), _scale(exponent))
    except OverflowError:
        return sign * math.inf


def extended_to_int(raw):
    """
    Decode 10 big-endian bytes into an int, truncating toward zero.

    Raises:
        ValueError: for infinity / NaN
    """
    negative, exponent, mantissa = _unpack(raw)

    if exponent == MAX_EXPONENT:
        raise ValueError("extended float is infinite or NaN")

    shift = _scale(exponent)
    if shift >= 0:
        value = mantissa << shift
    else:
        value = mantissa >> -shift

    return -value if negative else value


def encode_extended(value):
    """
    Encode a non-negative finite number as 10 big-endian bytes.

    Integers are encoded exactly up to 64 significant bits; floats keep
    their full binary64 precision.
    """
    if isinstance(value, float):
        if not math.isfinite(value) or value < 0:
            raise ValueError(f"cannot encode {value!r}")
        if value == 0:
            return bytes(EXTENDED_SIZE)
        fraction, exp = math.frexp(value)
        mantissa = int(fraction * (1 << _MANTISSA_BITS))
        exponent = exp - 1 + EXPONENT_BIAS
    else:
        value = int(value)
        if value < 0:
            raise ValueError(f"cannot encode {value!r}")
        if value == 0:
            return bytes(EXTENDED_SIZE)
        bits = value.bit_length()
        if bits <= _MANTISSA_BITS:
            mantissa = value << (_MANTISSA_BITS - bits)
        else:
            mantissa = value >> (bits - _MANTISSA_BITS)
        exponent = bits - 1 + EXPONENT_BIAS

    if exponent >= MAX_EXPONENT:
        raise ValueError(f"{value!r} is out of range for an extended float")

    return struct.pack(">HQ", exponent, mantissa)
