"""Confluence comment data model."""

from dataclasses import dataclass
from typing import Any, Dict, Optional

from .confluence_page import Identity


@dataclass(frozen=True)
class Comment:
    """Comment attached to a page.

    The page id is supplied by the caller that fetched the comment; the raw
    comment payload does not reliably carry it.

    Attributes:
        id: Comment ID
        page_id: Page the comment belongs to
        content: Plain text derived from the storage body
        created_by: Comment author
        created: Creation timestamp
        parent_id: Parent comment ID for threaded replies
        content_markup: The storage format body
    """
    id: str
    page_id: str
    content: str
    created_by: Identity
    created: str
    parent_id: Optional[str] = None
    content_markup: str = ''

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            'id': self.id,
            'pageId': self.page_id,
            'content': self.content,
            'createdBy': self.created_by.to_dict(),
            'created': self.created,
        }
        if self.parent_id is not None:
            data['parentId'] = self.parent_id
        return data
