"""
Symbol record model for package indexing.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict


class SymbolKind(str, Enum):
    """Closed set of declaration kinds the indexer records."""

    FUNCTION = "function"
    CLASS = "class"
    INTERFACE = "interface"
    TYPE = "type"
    ENUM = "enum"
    NAMESPACE = "namespace"
    VARIABLE = "variable"


SIGNATURE_MAX_LENGTH = 200


@dataclass(frozen=True)
class SymbolRecord:
    """A top-level declaration found in a package file."""

    kind: SymbolKind
    name: str
    file: str  # POSIX path relative to the package directory
    start_line: int
    end_line: int
    signature: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {
            "kind": self.kind.value,
            "name": self.name,
            "file": self.file,
            "startLine": self.start_line,
            "endLine": self.end_line,
            "signature": self.signature,
        }

    def to_summary(self) -> Dict[str, Any]:
        """Metadata without the signature preview."""
        return {
            "kind": self.kind.value,
            "name": self.name,
            "startLine": self.start_line,
            "endLine": self.end_line,
        }
