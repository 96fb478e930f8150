"""Data models for Confluence pages, comments, spaces and attachments."""

from src.models.attachment import Attachment
from src.models.comment import Comment
from src.models.confluence_page import Identity, Label, Page, PageLinks
from src.models.results import AttachmentList, CommentList, PageSearchResult, SpaceList
from src.models.space import Space

__all__ = [
    'Attachment',
    'AttachmentList',
    'Comment',
    'CommentList',
    'Identity',
    'Label',
    'Page',
    'PageLinks',
    'PageSearchResult',
    'Space',
    'SpaceList',
]
