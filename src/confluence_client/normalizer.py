"""Fold raw Confluence JSON into canonical entities.

The content API returns heterogeneous, deeply nested and partially optional
payloads whose shape depends on the `expand` parameter. The functions in this
module read those payloads leniently and derive relations that are not
plain fields (nearest parent, label set, author identities).
"""

from typing import Any, Dict, List, Optional

from ..content_converter.markup import extract_plain_text
from ..models import Attachment, Comment, Identity, Label, Page, PageLinks, Space
from .errors import NormalizationError


def _dig(data: Any, *keys: str) -> Any:
    """Follow nested dict keys, returning None at the first missing level."""
    for key in keys:
        if not isinstance(data, dict):
            return None
        data = data.get(key)
    return data


def _require_id(raw: Any, entity: str) -> str:
    if not isinstance(raw, dict):
        raise NormalizationError(f"Expected a JSON object for {entity}, got {type(raw).__name__}")
    raw_id = raw.get('id')
    if raw_id is None or raw_id == '':
        raise NormalizationError(f"{entity} payload has no id")
    return str(raw_id)


def _identity(user: Any) -> Identity:
    if not isinstance(user, dict):
        return Identity(id='', display_name='')
    user_id = user.get('accountId') or user.get('userKey') or user.get('username') or ''
    return Identity(
        id=str(user_id),
        display_name=user.get('displayName') or user.get('publicName') or '',
        email=user.get('email') or None,
    )


def _results(container: Any) -> List[Any]:
    results = _dig(container, 'results')
    return results if isinstance(results, list) else []


def _space_key(raw: Dict[str, Any]) -> str:
    # The expandable reference looks like "/rest/api/space/TEAM"
    expandable = _dig(raw, '_expandable', 'space')
    if isinstance(expandable, str) and expandable.strip('/'):
        return expandable.rstrip('/').split('/')[-1]
    key = _dig(raw, 'space', 'key')
    return str(key) if key else ''


def _parent_id(ancestors: Any) -> Optional[str]:
    """Only the nearest ancestor (last in the root-first chain) is kept."""
    if not isinstance(ancestors, list) or not ancestors:
        return None
    nearest = ancestors[-1]
    if isinstance(nearest, dict) and nearest.get('id') is not None:
        return str(nearest['id'])
    return None


def _labels(raw: Dict[str, Any]) -> Optional[tuple]:
    results = _dig(raw, 'metadata', 'labels', 'results')
    if not isinstance(results, list):
        return None

    labels = []
    seen = set()
    for item in results:
        if not isinstance(item, dict) or item.get('id') is None:
            continue
        label_id = str(item['id'])
        if label_id in seen:
            continue
        seen.add(label_id)
        labels.append(Label(id=label_id, name=item.get('name') or ''))
    return tuple(labels)


def _children_ids(raw: Dict[str, Any]) -> Optional[tuple]:
    children = _dig(raw, 'children', 'page')
    if not isinstance(children, dict):
        return None
    return tuple(
        str(child['id']) for child in _results(children)
        if isinstance(child, dict) and child.get('id') is not None
    )


def normalize_page(raw: Dict[str, Any]) -> Page:
    """Build a Page from a content API payload.

    Args:
        raw: Page JSON as returned by GET rest/api/content/{id} or search

    Returns:
        Page entity

    Raises:
        NormalizationError: If the payload is not an object or lacks an id
    """
    page_id = _require_id(raw, 'page')
    markup = _dig(raw, 'body', 'storage', 'value') or ''
    history = raw.get('history') or {}

    version = _dig(raw, 'version', 'number')
    updated_by = _dig(history, 'lastUpdated', 'by') or _dig(raw, 'version', 'by')

    return Page(
        id=page_id,
        title=raw.get('title') or '',
        space_key=_space_key(raw),
        version=int(version) if version else 1,
        content=extract_plain_text(markup),
        created=raw.get('created') or _dig(history, 'createdDate') or '',
        updated=(
            raw.get('updated')
            or _dig(raw, 'version', 'when')
            or _dig(history, 'lastUpdated', 'when')
            or ''
        ),
        created_by=_identity(_dig(history, 'createdBy')),
        updated_by=_identity(updated_by),
        links=PageLinks(
            webui=_dig(raw, '_links', 'webui') or '',
            edit=_dig(raw, '_links', 'editui') or None,
            tinyui=_dig(raw, '_links', 'tinyui') or None,
        ),
        parent_id=_parent_id(raw.get('ancestors')),
        children_ids=_children_ids(raw),
        labels=_labels(raw),
        content_markup=markup,
    )


def normalize_comment(
    raw: Dict[str, Any],
    page_id: str,
    parent_id: Optional[str] = None
) -> Comment:
    """Build a Comment from a comment payload.

    Comments carry their author in the history block rather than a flat
    field. The page id is stamped from the caller's context.

    Args:
        raw: Comment JSON
        page_id: Page the comment was read from or posted to
        parent_id: Parent comment ID known to the caller; when omitted, the
            nearest comment ancestor in the payload is used if present

    Returns:
        Comment entity

    Raises:
        NormalizationError: If the payload is not an object or lacks an id
    """
    comment_id = _require_id(raw, 'comment')
    markup = _dig(raw, 'body', 'storage', 'value') or ''
    history = raw.get('history') or {}

    if parent_id is None:
        ancestors = raw.get('ancestors')
        if isinstance(ancestors, list):
            comment_ancestors = [
                a for a in ancestors
                if isinstance(a, dict) and a.get('type', 'comment') == 'comment'
            ]
            parent_id = _parent_id(comment_ancestors)

    return Comment(
        id=comment_id,
        page_id=str(page_id),
        content=extract_plain_text(markup),
        created_by=_identity(_dig(history, 'createdBy') or _dig(raw, 'version', 'by')),
        created=_dig(history, 'createdDate') or _dig(raw, 'version', 'when') or '',
        parent_id=parent_id,
        content_markup=markup,
    )


def normalize_space(raw: Dict[str, Any]) -> Space:
    """Build a Space, lower-casing the service's upper-case enumerations."""
    space_id = _require_id(raw, 'space')
    description = _dig(raw, 'description', 'plain', 'value')
    return Space(
        id=space_id,
        key=raw.get('key') or '',
        name=raw.get('name') or '',
        type=str(raw.get('type') or '').lower(),
        status=str(raw.get('status') or '').lower(),
        description=description,
    )


def normalize_attachment(raw: Dict[str, Any]) -> Attachment:
    """Build an Attachment from the minimal metadata the service returns."""
    attachment_id = _require_id(raw, 'attachment')
    metadata = raw.get('metadata') or {}
    extensions = raw.get('extensions') or {}

    file_size = extensions.get('fileSize')
    version = _dig(raw, 'version', 'number')

    return Attachment(
        id=attachment_id,
        title=raw.get('title') or '',
        media_type=metadata.get('mediaType') or extensions.get('mediaType'),
        file_size=int(file_size) if file_size is not None else None,
        comment=metadata.get('comment') or extensions.get('comment') or None,
        download_link=_dig(raw, '_links', 'download'),
        webui_link=_dig(raw, '_links', 'webui'),
        version=int(version) if version else None,
    )
