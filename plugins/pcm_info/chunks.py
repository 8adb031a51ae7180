"""
chunks.py
---------

Container families and their closed chunk tables.

Defines:
- ContainerFormat: WAVE (RIFF, little-endian) and AIFF (FORM, big-endian)
- ChunkAction: what the decoder does with a chunk identifier
- WAVE_CHUNKS / AIFF_CHUNKS: identifier -> action, one table per family
- ENVELOPE_MAGIC: outer magic -> family

Rules:
- Membership is per family. An identifier missing from the family's table
  is rejected, even when the other family knows it.
- Exactly one TARGET per family; it carries the format fields.
"""

from enum import Enum


# Outer envelope: 4-byte magic + 4-byte size + 4-byte format tag
ENVELOPE_SIZE = 12

# Chunk header: 4-byte identifier + 4-byte payload size
CHUNK_HEADER_SIZE = 8


class ChunkAction(Enum):
    TARGET = "target"
    SKIP = "skip"
    REJECT = "reject"


class ContainerFormat(Enum):
    """
    A container family. The value is the envelope magic.

    The family fixes the byte order of every multi-byte field that
    follows the magic, and which chunk table applies.
    """

    WAVE = b"RIFF"
    AIFF = b"FORM"

    @property
    def byte_order(self):
        return "<" if self is ContainerFormat.WAVE else ">"

    @property
    def format_tag(self):
        return b"WAVE" if self is ContainerFormat.WAVE else b"AIFF"

    @property
    def chunk_table(self):
        return WAVE_CHUNKS if self is ContainerFormat.WAVE else AIFF_CHUNKS


# ------------------------------------------------------------
# Chunk tables
# ------------------------------------------------------------
WAVE_CHUNKS = {
    b"fmt ": ChunkAction.TARGET,
    b"bext": ChunkAction.SKIP,
    b"id3 ": ChunkAction.SKIP,
    b"Fake": ChunkAction.SKIP,
    b"JUNK": ChunkAction.SKIP,
}

AIFF_CHUNKS = {
    b"COMM": ChunkAction.TARGET,
    b"COMT": ChunkAction.SKIP,
    b"INST": ChunkAction.SKIP,
    b"MARK": ChunkAction.SKIP,
}

ENVELOPE_MAGIC = {fmt.value: fmt for fmt in ContainerFormat}


def classify_chunk(container, chunk_id):
    """Return the ChunkAction for chunk_id within the given family."""
    return container.chunk_table.get(bytes(chunk_id), ChunkAction.REJECT)
