"""Collection results returned by list and search operations.

`total` is the size reported by the service, which can differ from the
number of items actually returned (pagination, skipped items).
"""

from dataclasses import dataclass
from typing import Tuple

from .attachment import Attachment
from .comment import Comment
from .confluence_page import Page
from .space import Space


@dataclass(frozen=True)
class PageSearchResult:
    total: int
    pages: Tuple[Page, ...]


@dataclass(frozen=True)
class SpaceList:
    total: int
    spaces: Tuple[Space, ...]


@dataclass(frozen=True)
class CommentList:
    total: int
    comments: Tuple[Comment, ...]


@dataclass(frozen=True)
class AttachmentList:
    total: int
    attachments: Tuple[Attachment, ...]
