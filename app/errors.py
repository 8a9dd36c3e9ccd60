from pathlib import Path


class ParseError(ValueError):
    """A delimited line could not be turned into a record."""

    def __init__(self, kind: str, line: str, reason: str) -> None:
        self.kind = kind
        self.line = line
        self.reason = reason
        super().__init__(f"Cannot parse {kind} line {line!r}: {reason}")


class ReportError(Exception):
    """Fatal condition that aborts report generation."""


class MissingReferenceFileError(ReportError):
    def __init__(self, path: Path) -> None:
        self.path = path
        super().__init__(f"Reference file missing or unreadable: {path}")


class MissingSalesFileError(ReportError):
    def __init__(self, document_id: str, path: Path) -> None:
        self.document_id = document_id
        self.path = path
        super().__init__(f"Sales file for seller '{document_id}' missing or unreadable: {path}")
