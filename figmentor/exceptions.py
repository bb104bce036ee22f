"""Exceptions raised by Figmentor."""


class FigmentorError(Exception):
    """Base class for all Figmentor errors."""


class ConversionError(FigmentorError):
    """The input to a conversion is structurally invalid; no document is produced."""


class ImporterError(FigmentorError):
    """A design source could not be read or retrieved."""
