"""
Item and list descriptors exchanged with the item source.
"""

from dataclasses import dataclass, field
from typing import Dict, List


@dataclass(frozen=True)
class ListInfo:
    """An available list."""
    id: str
    label: str

    def to_dict(self) -> Dict[str, str]:
        """Convert to dictionary."""
        return {"id": self.id, "label": self.label}


@dataclass(frozen=True)
class ListItem:
    """
    A single rankable item.

    The id is unique within its list and stays stable across reloads,
    the label is only displayed.
    """
    id: str
    label: str

    def to_dict(self) -> Dict[str, str]:
        """Convert to dictionary."""
        return {"id": self.id, "label": self.label}


@dataclass
class LoadedList:
    """A list definition together with its ordered items."""
    info: ListInfo
    items: List[ListItem] = field(default_factory=list)

    @property
    def item_ids(self) -> List[str]:
        """Item identifiers in positional order."""
        return [item.id for item in self.items]
