"""Confluence attachment data model."""

from dataclasses import dataclass
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class Attachment:
    """File attached to a page.

    Attributes:
        id: Attachment ID (e.g., "att123456")
        title: File name
        media_type: MIME type reported by the service
        file_size: Size in bytes
        comment: Version comment supplied at upload time
        download_link: Relative download link
        webui_link: Relative link to the attachment preview
        version: Attachment version number
    """
    id: str
    title: str
    media_type: Optional[str] = None
    file_size: Optional[int] = None
    comment: Optional[str] = None
    download_link: Optional[str] = None
    webui_link: Optional[str] = None
    version: Optional[int] = None

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {'id': self.id, 'title': self.title}
        optional = {
            'mediaType': self.media_type,
            'fileSize': self.file_size,
            'comment': self.comment,
            'downloadLink': self.download_link,
            'webuiLink': self.webui_link,
            'version': self.version,
        }
        data.update({key: value for key, value in optional.items() if value is not None})
        return data
