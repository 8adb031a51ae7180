"""
pcm_info package
----------------

Reads the sample rate, bit depth and channel count of RIFF/WAVE and
FORM/AIFF files from their headers, without touching the audio data.

Features:
- Chunk-walking header decoder with a per-family chunk table
- Exact 80-bit extended float decoding for AIFF sample rates
- Case-sensitive extension filter, optional recursion
- List and count reports
- Parallel batch decoding, per-file failure isolation

Primary entry points:

    from plugins.pcm_info.decoder import decode, read_info
    from plugins.pcm_info.tool import run
"""

__all__ = ["run", "__version__"]

__version__ = "0.1.0"


def run(*args, **kwargs):
    """Lazy import wrapper for the run function."""
    from .tool import run as _run
    return _run(*args, **kwargs)
