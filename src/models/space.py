"""Confluence space data model."""

from dataclasses import dataclass
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class Space:
    """Confluence space.

    Attributes:
        id: Space ID
        key: Space key (e.g., "TEAM")
        name: Display name
        type: "global", "personal" or "team" (lower case)
        status: "current" or "archived" (lower case)
        description: Plain text description, if any
    """
    id: str
    key: str
    name: str
    type: str
    status: str
    description: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            'id': self.id,
            'key': self.key,
            'name': self.name,
            'type': self.type,
            'status': self.status,
        }
        if self.description is not None:
            data['description'] = self.description
        return data
