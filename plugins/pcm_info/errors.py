"""
errors.py
---------

Failure taxonomy for the PCM header decoder.

Every error carries:
- kind:  the class name, used by the reports
- ident: the 4 raw bytes of the offending chunk/envelope identifier,
         or b"void" when no identifier applies

Hierarchy:

    DecodeError
    ├── ShortRead
    ├── InvalidChunkID
    │   └── InvalidContainerEnvelope
    ├── InvalidContainerFormat
    │   ├── InvalidRIFFChunkFormat
    │   └── InvalidFORMChunkFormat
    └── InvalidSampleRate
"""

VOID_IDENT = b"void"
IDENT_SIZE = 4


class DecodeError(Exception):
    """Base class for all header decoding failures."""

    def __init__(self, message="", ident=VOID_IDENT):
        super().__init__(message or self.__class__.__name__)
        self.ident = bytes(ident[:IDENT_SIZE])

    @property
    def kind(self):
        return self.__class__.__name__

    def __reduce__(self):
        # Keep ident when results cross a process boundary
        return (self.__class__, (str(self), self.ident))


class ShortRead(DecodeError):
    """Fewer bytes were available than the current parsing step needs."""


class InvalidChunkID(DecodeError):
    """A chunk identifier is not in the container family's table."""


class InvalidContainerEnvelope(InvalidChunkID):
    """The magic at offset 0 is neither RIFF nor FORM."""


class InvalidContainerFormat(DecodeError):
    """The format tag at offset 8 does not match the envelope magic."""


class InvalidRIFFChunkFormat(InvalidContainerFormat):
    pass


class InvalidFORMChunkFormat(InvalidContainerFormat):
    pass


class InvalidSampleRate(DecodeError):
    """The AIFF sample rate does not fit an unsigned 32-bit integer."""
