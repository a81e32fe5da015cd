"""Errors raised by the conformer double check and its readers."""

from typing import Optional


class DoubleCheckError(ValueError):
    """Base class for errors that abort a double check run."""


class InvalidThreshold(DoubleCheckError):
    """An energy or distance threshold is negative."""


class EmptyEnsemble(DoubleCheckError):
    """The ensemble handed to the double check contains no structures."""


class StructureMismatch(DoubleCheckError):
    """Two structures with different atom counts were compared."""


class DegenerateStructure(DoubleCheckError):
    """A structure has fewer than two atoms and has no fingerprint."""


class EnsembleParseError(ValueError):
    """A structure file could not be parsed."""

    def __init__(
        self, message: str, source: Optional[str] = None, line_no: Optional[int] = None
    ):
        self.source = source
        self.line_no = line_no
        location = ""
        if source is not None:
            location = f"{source}"
            if line_no is not None:
                location += f":{line_no}"
            location += ": "
        super().__init__(f"{location}{message}")
