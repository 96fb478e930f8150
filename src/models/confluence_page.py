"""Confluence page data model."""

from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple


@dataclass(frozen=True)
class Identity:
    """A Confluence user as seen in page and comment history.

    Attributes:
        id: Account id (empty when the service omits it)
        display_name: Human-readable name
        email: Email address, only present when the service exposes it
    """
    id: str
    display_name: str
    email: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {'id': self.id, 'displayName': self.display_name}
        if self.email is not None:
            data['email'] = self.email
        return data


@dataclass(frozen=True)
class PageLinks:
    """Relative UI links for a page."""
    webui: str
    edit: Optional[str] = None
    tinyui: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {'webui': self.webui}
        if self.edit:
            data['edit'] = self.edit
        if self.tinyui:
            data['tinyui'] = self.tinyui
        return data


@dataclass(frozen=True)
class Label:
    """A page label. Labels are identified by id, not by name."""
    id: str
    name: str

    def to_dict(self) -> Dict[str, Any]:
        return {'name': self.name, 'id': self.id}


@dataclass(frozen=True)
class Page:
    """Confluence page normalized from the content API.

    Attributes:
        id: Unique identifier for the page
        title: Page title
        space_key: Space key where the page resides (e.g., "TEAM")
        version: Current version number (required for updates)
        content: Plain text derived from the storage body
        created: Creation timestamp as reported by the service
        updated: Last update timestamp as reported by the service
        created_by: Author of the first version
        updated_by: Author of the latest version
        links: UI links
        parent_id: Nearest ancestor page ID (None if page is at root level)
        children_ids: Direct child page IDs, when the service expanded them
        labels: Labels attached to the page, unique by id
        content_markup: The storage format body the content was derived from
    """
    id: str
    title: str
    space_key: str
    version: int
    content: str
    created: str
    updated: str
    created_by: Identity
    updated_by: Identity
    links: PageLinks
    parent_id: Optional[str] = None
    children_ids: Optional[Tuple[str, ...]] = None
    labels: Optional[Tuple[Label, ...]] = None
    content_markup: str = ''

    def to_dict(self, include_markup: bool = False) -> Dict[str, Any]:
        """Serialize to the JSON shape handed to the calling layer.

        Args:
            include_markup: Also emit the storage body as `contentMarkup`
        """
        data: Dict[str, Any] = {
            'id': self.id,
            'title': self.title,
            'spaceKey': self.space_key,
            'version': self.version,
            'content': self.content,
            'created': self.created,
            'updated': self.updated,
            'createdBy': self.created_by.to_dict(),
            'updatedBy': self.updated_by.to_dict(),
            'links': self.links.to_dict(),
        }
        if self.parent_id is not None:
            data['parentId'] = self.parent_id
        if self.children_ids is not None:
            data['childrenIds'] = list(self.children_ids)
        if self.labels is not None:
            data['labels'] = [label.to_dict() for label in self.labels]
        if include_markup:
            data['contentMarkup'] = self.content_markup
        return data
