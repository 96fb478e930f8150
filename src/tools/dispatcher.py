"""Tool layer over ConfluenceAPI.

Each tool takes a JSON argument object, calls one operation and renders the
result as indented JSON (or a short confirmation for page creation). Service
and argument failures become error results rather than exceptions so that a
tool host can show them to the caller verbatim.
"""

import base64
import binascii
import json
import logging
import time
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional

from ..confluence_client.api_wrapper import ConfluenceAPI, EditorMode
from ..confluence_client.errors import GatewayError
from ..content_converter import optimize_for_ai, to_markdown

logger = logging.getLogger(__name__)

SEARCH_LIMIT = 10
SPACES_LIMIT = 50
COMMENTS_LIMIT = 25
ATTACHMENTS_LIMIT = 25

OUTPUT_FORMATS = ('text', 'markdown')

_FORMAT_PROPERTY = {
    'type': 'string',
    'enum': list(OUTPUT_FORMATS),
    'description': 'Format to return the content in (default: text)',
}
_INCLUDE_MARKUP_PROPERTY = {
    'type': 'boolean',
    'description': (
        'Whether to include the original Confluence Storage Format (XHTML) '
        'markup in the response (default: false)'
    ),
}


def _page_id_property(purpose: str) -> Dict[str, str]:
    return {'type': 'string', 'description': f'ID of the page {purpose}'}


def _limit_property(default: int, what: str) -> Dict[str, str]:
    return {
        'type': 'number',
        'description': f'Maximum number of {what} to return (default: {default})',
    }


TOOL_DEFINITIONS: List[Dict[str, Any]] = [
    {
        'name': 'get_page',
        'description': 'Retrieve a Confluence page by ID',
        'inputSchema': {
            'type': 'object',
            'properties': {
                'pageId': _page_id_property('to retrieve'),
                'format': _FORMAT_PROPERTY,
                'includeMarkup': _INCLUDE_MARKUP_PROPERTY,
            },
            'required': ['pageId'],
        },
    },
    {
        'name': 'search_pages',
        'description': 'Search for Confluence pages using CQL (Confluence Query Language)',
        'inputSchema': {
            'type': 'object',
            'properties': {
                'query': {'type': 'string', 'description': 'CQL search query'},
                'limit': _limit_property(SEARCH_LIMIT, 'results'),
                'format': _FORMAT_PROPERTY,
                'includeMarkup': _INCLUDE_MARKUP_PROPERTY,
            },
            'required': ['query'],
        },
    },
    {
        'name': 'get_spaces',
        'description': 'List all available Confluence spaces',
        'inputSchema': {
            'type': 'object',
            'properties': {
                'limit': _limit_property(SPACES_LIMIT, 'spaces'),
            },
        },
    },
    {
        'name': 'create_page',
        'description': 'Create a new Confluence page',
        'inputSchema': {
            'type': 'object',
            'properties': {
                'spaceKey': {
                    'type': 'string',
                    'description': 'Key of the space where the page will be created',
                },
                'title': {'type': 'string', 'description': 'Title of the new page'},
                'content': {
                    'type': 'string',
                    'description': 'Content of the page in Confluence Storage Format (XHTML)',
                },
                'parentId': {'type': 'string', 'description': 'Optional ID of the parent page'},
                'editorMode': {
                    'type': 'string',
                    'enum': [mode.value for mode in EditorMode],
                    'description': (
                        'Editor mode to use: v1 (legacy), v2 (new), or auto '
                        '(let Confluence decide). Defaults to v2'
                    ),
                },
            },
            'required': ['spaceKey', 'title', 'content'],
        },
    },
    {
        'name': 'update_page',
        'description': 'Update an existing Confluence page',
        'inputSchema': {
            'type': 'object',
            'properties': {
                'pageId': _page_id_property('to update'),
                'title': {'type': 'string', 'description': 'New title of the page'},
                'content': {
                    'type': 'string',
                    'description': (
                        'New content in Confluence Storage Format (XHTML). Plain text '
                        'or Markdown is displayed literally, not rendered.'
                    ),
                },
                'version': {
                    'type': 'number',
                    'description': 'Current version number of the page',
                },
            },
            'required': ['pageId', 'title', 'content', 'version'],
        },
    },
    {
        'name': 'get_comments',
        'description': 'Retrieve comments for a specific Confluence page',
        'inputSchema': {
            'type': 'object',
            'properties': {
                'pageId': _page_id_property('to retrieve comments for'),
                'format': _FORMAT_PROPERTY,
                'limit': _limit_property(COMMENTS_LIMIT, 'comments'),
            },
            'required': ['pageId'],
        },
    },
    {
        'name': 'add_comment',
        'description': 'Add a comment to a Confluence page',
        'inputSchema': {
            'type': 'object',
            'properties': {
                'pageId': _page_id_property('to add the comment to'),
                'content': {
                    'type': 'string',
                    'description': 'Comment content in Confluence Storage Format (XHTML)',
                },
                'parentId': {
                    'type': 'string',
                    'description': 'Optional ID of the parent comment for threading',
                },
            },
            'required': ['pageId', 'content'],
        },
    },
    {
        'name': 'get_attachments',
        'description': 'Retrieve attachments for a specific Confluence page',
        'inputSchema': {
            'type': 'object',
            'properties': {
                'pageId': _page_id_property('to retrieve attachments for'),
                'limit': _limit_property(ATTACHMENTS_LIMIT, 'attachments'),
            },
            'required': ['pageId'],
        },
    },
    {
        'name': 'add_attachment',
        'description': 'Add an attachment to a Confluence page',
        'inputSchema': {
            'type': 'object',
            'properties': {
                'pageId': _page_id_property('to attach the file to'),
                'filename': {
                    'type': 'string',
                    'description': 'Desired filename for the attachment',
                },
                'fileContentBase64': {
                    'type': 'string',
                    'description': 'Base64 encoded content of the file',
                },
                'comment': {
                    'type': 'string',
                    'description': 'Optional comment for the attachment version',
                },
            },
            'required': ['pageId', 'filename', 'fileContentBase64'],
        },
    },
]


class ToolNotFoundError(LookupError):
    """Raised when a tool name is not one of TOOL_DEFINITIONS."""

    def __init__(self, name: str):
        super().__init__(f"Unknown tool: {name}")
        self.name = name


@dataclass(frozen=True)
class ToolResult:
    """Rendered outcome of one tool call."""
    text: str
    is_error: bool = False


def _dumps(data: Any) -> str:
    return json.dumps(data, indent=2, ensure_ascii=False)


def _required(arguments: Dict[str, Any], key: str) -> Any:
    value = arguments.get(key)
    if value is None or value == '':
        raise ValueError(f"Missing required argument: {key}")
    return value


def _limit(arguments: Dict[str, Any], default: int) -> int:
    value = arguments.get('limit', default)
    if isinstance(value, bool) or not isinstance(value, (int, float)) or value != int(value) or value < 1:
        raise ValueError(f"limit must be a positive integer, got {value!r}")
    return int(value)


def _output_format(arguments: Dict[str, Any]) -> str:
    output_format = arguments.get('format') or 'text'
    if output_format not in OUTPUT_FORMATS:
        raise ValueError(f"format must be one of {', '.join(OUTPUT_FORMATS)}, got {output_format!r}")
    return output_format


def _render(content: str, markup: str, output_format: str) -> str:
    """Pick plain text or Markdown converted from the storage body."""
    if output_format == 'markdown' and markup:
        return to_markdown(markup)
    return content


class ToolDispatcher:
    """Routes tool calls to ConfluenceAPI and renders their results.

    Consecutive calls are spaced by at least `request_delay` seconds.

    Example:
        >>> dispatcher = ToolDispatcher(api)
        >>> result = dispatcher.call('get_spaces', {'limit': 5})
        >>> result.is_error
        False
    """

    def __init__(
        self,
        api: ConfluenceAPI,
        request_delay: float = 0.0,
        sleep: Callable[[float], None] = time.sleep,
        clock: Callable[[], float] = time.monotonic,
    ):
        self._api = api
        self._request_delay = request_delay
        self._sleep = sleep
        self._clock = clock
        self._last_call: Optional[float] = None

        self._handlers = {
            'get_page': (self._get_page, 'Error retrieving page'),
            'search_pages': (self._search_pages, 'Error searching pages'),
            'get_spaces': (self._get_spaces, 'Error retrieving spaces'),
            'create_page': (self._create_page, 'Failed to create page'),
            'update_page': (self._update_page, 'Error updating page'),
            'get_comments': (self._get_comments, 'Error retrieving comments'),
            'add_comment': (self._add_comment, 'Error adding comment'),
            'get_attachments': (self._get_attachments, 'Error retrieving attachments'),
            'add_attachment': (self._add_attachment, 'Error adding attachment'),
        }

    @property
    def tool_names(self) -> List[str]:
        return list(self._handlers)

    def call(self, name: str, arguments: Optional[Dict[str, Any]] = None) -> ToolResult:
        """Run one tool.

        Args:
            name: Tool name from TOOL_DEFINITIONS
            arguments: Tool arguments (camelCase keys)

        Returns:
            ToolResult; is_error is set when the operation or its arguments failed

        Raises:
            ToolNotFoundError: If no tool has this name
        """
        if name not in self._handlers:
            raise ToolNotFoundError(name)

        handler, error_prefix = self._handlers[name]
        self._wait_for_slot()

        logger.info(f"Calling tool {name}")
        try:
            return ToolResult(text=handler(arguments or {}))
        except (GatewayError, ValueError) as e:
            logger.warning(f"Tool {name} failed: {e}")
            return ToolResult(text=f"{error_prefix}: {e}", is_error=True)

    def _wait_for_slot(self) -> None:
        if self._request_delay > 0 and self._last_call is not None:
            remaining = self._request_delay - (self._clock() - self._last_call)
            if remaining > 0:
                logger.debug(f"Waiting {remaining:.2f}s before next request")
                self._sleep(remaining)
        self._last_call = self._clock()

    def _get_page(self, arguments: Dict[str, Any]) -> str:
        output_format = _output_format(arguments)
        page = self._api.get_page(_required(arguments, 'pageId'))

        data = {
            'id': page.id,
            'title': page.title,
            'spaceKey': page.space_key,
            'content': _render(page.content, page.content_markup, output_format),
            'url': page.links.webui,
            'version': page.version,
            'created': page.created,
            'updated': page.updated,
            'createdBy': page.created_by.display_name,
            'updatedBy': page.updated_by.display_name,
        }
        if page.parent_id is not None:
            data['parentId'] = page.parent_id
        if page.labels:
            data['labels'] = [label.to_dict() for label in page.labels]
        if arguments.get('includeMarkup') and page.content_markup:
            data['contentMarkup'] = page.content_markup
        return _dumps(data)

    def _search_pages(self, arguments: Dict[str, Any]) -> str:
        query = _required(arguments, 'query')
        limit = _limit(arguments, SEARCH_LIMIT)
        output_format = _output_format(arguments)
        include_markup = bool(arguments.get('includeMarkup'))

        result = self._api.search_pages(query, limit=limit)

        pages = []
        for page in result.pages[:limit]:
            data = {
                'id': page.id,
                'title': page.title,
                'spaceKey': page.space_key,
                'content': optimize_for_ai(
                    _render(page.content, page.content_markup, output_format)
                ),
                'url': page.links.webui,
                'version': page.version,
                'updated': page.updated,
                'updatedBy': page.updated_by.display_name,
            }
            if include_markup and page.content_markup:
                data['contentMarkup'] = page.content_markup
            pages.append(data)

        return _dumps({'total': result.total, 'returned': len(pages), 'pages': pages})

    def _get_spaces(self, arguments: Dict[str, Any]) -> str:
        limit = _limit(arguments, SPACES_LIMIT)
        result = self._api.get_spaces(limit=limit)
        spaces = [space.to_dict() for space in result.spaces[:limit]]
        return _dumps({'total': result.total, 'returned': len(spaces), 'spaces': spaces})

    def _create_page(self, arguments: Dict[str, Any]) -> str:
        page = self._api.create_page(
            _required(arguments, 'spaceKey'),
            _required(arguments, 'title'),
            _required(arguments, 'content'),
            parent_id=arguments.get('parentId'),
            editor_mode=arguments.get('editorMode'),
        )
        return (
            f"Page created successfully!\n\n"
            f"ID: {page.id}\n"
            f"Title: {page.title}\n"
            f"Space: {page.space_key}\n"
            f"URL: {page.links.webui}"
        )

    def _update_page(self, arguments: Dict[str, Any]) -> str:
        version = _required(arguments, 'version')
        if isinstance(version, bool) or not isinstance(version, (int, float)):
            raise ValueError(f"version must be a number, got {version!r}")

        page = self._api.update_page(
            _required(arguments, 'pageId'),
            _required(arguments, 'title'),
            _required(arguments, 'content'),
            int(version),
        )
        return _dumps({
            'id': page.id,
            'title': page.title,
            'spaceKey': page.space_key,
            'version': page.version,
            'url': page.links.webui,
            'updated': page.updated,
            'updatedBy': page.updated_by.display_name,
            'message': 'Page updated successfully',
        })

    def _get_comments(self, arguments: Dict[str, Any]) -> str:
        page_id = _required(arguments, 'pageId')
        limit = _limit(arguments, COMMENTS_LIMIT)
        output_format = _output_format(arguments)

        result = self._api.get_comments(page_id, limit=limit)

        comments = []
        for comment in result.comments[:limit]:
            data = comment.to_dict()
            data['content'] = optimize_for_ai(
                _render(comment.content, comment.content_markup, output_format)
            )
            comments.append(data)

        return _dumps({'total': result.total, 'returned': len(comments), 'comments': comments})

    def _add_comment(self, arguments: Dict[str, Any]) -> str:
        comment = self._api.add_comment(
            _required(arguments, 'pageId'),
            _required(arguments, 'content'),
            parent_id=arguments.get('parentId'),
        )
        data = comment.to_dict()
        data['content'] = optimize_for_ai(comment.content)
        data['message'] = 'Comment added successfully'
        return _dumps(data)

    def _get_attachments(self, arguments: Dict[str, Any]) -> str:
        page_id = _required(arguments, 'pageId')
        limit = _limit(arguments, ATTACHMENTS_LIMIT)

        result = self._api.get_attachments(page_id, limit=limit)
        attachments = [attachment.to_dict() for attachment in result.attachments[:limit]]
        return _dumps({
            'total': result.total,
            'returned': len(attachments),
            'attachments': attachments,
        })

    def _add_attachment(self, arguments: Dict[str, Any]) -> str:
        encoded = _required(arguments, 'fileContentBase64')
        try:
            file_content = base64.b64decode(encoded, validate=True)
        except (binascii.Error, ValueError) as e:
            raise ValueError(f"fileContentBase64 is not valid base64: {e}") from e

        attachment = self._api.add_attachment(
            _required(arguments, 'pageId'),
            file_content,
            _required(arguments, 'filename'),
            comment=arguments.get('comment'),
        )
        data = attachment.to_dict()
        data['message'] = 'Attachment added successfully'
        return _dumps(data)
