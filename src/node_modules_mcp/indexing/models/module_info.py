"""
Installed module model.
"""

from dataclasses import dataclass
from typing import Dict


@dataclass(frozen=True)
class ModuleInfo:
    """An installed package found in one of the node_modules directories."""

    name: str
    version: str
    directory: str  # absolute path

    def to_dict(self) -> Dict[str, str]:
        return {"name": self.name, "version": self.version}
