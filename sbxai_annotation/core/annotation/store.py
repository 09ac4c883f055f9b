"""
Annotation session store.

Ordered annotations of the open image, backed by the server's session-item
calls. Nothing is persisted locally beyond the lifetime of the object.
"""

import logging
from typing import List, Optional

from ...errors import MalformedResponse
from ...utils.misc import timestamp_id
from .state import Annotation

logger = logging.getLogger(__name__)


class AnnotationSessionStore:
    def __init__(self, projects, source: str = "manual"):
        self.projects = projects
        self.source = source
        self._annotations: List[Annotation] = []

    def open(self, image_id, cancel=None) -> str:
        """
        Create a server-side session for ``image_id`` and return its id.

        Calls are not de-duplicated: opening the same image twice creates
        two sessions on the server.
        """
        data = self.projects.create_session(image_id, source=self.source, cancel=cancel)
        session_id = data.get("session_id") if isinstance(data, dict) else None
        if session_id is None:
            raise MalformedResponse(f"No session id for image {image_id}: {data!r}")
        session_id = str(session_id)
        logger.debug("Opened session %s for image %s", session_id, image_id)
        return session_id

    def list(self, session_id, cancel=None) -> List[Annotation]:
        """Fetch the session's items and make them the local state."""
        raw = self.projects.list_session_items(session_id, cancel=cancel)
        try:
            annotations = [Annotation.from_dict(item) for item in raw]
        except (AttributeError, KeyError, TypeError, ValueError) as e:
            raise MalformedResponse(f"Unreadable item in session {session_id}: {e!r}") from e
        self._annotations = annotations
        return list(self._annotations)

    def append(self, session_id, annotation: Annotation, cancel=None) -> Annotation:
        """
        Persist ``annotation`` and append the stored record locally.

        Nothing is appended when the call fails; the error propagates and is
        not retried.

        Raises:
            ValidationError: the annotation geometry is malformed
            NetworkError, AuthError, ApiError: the call failed
        """
        annotation.validate()
        data = self.projects.create_session_item(
            session_id, annotation.form_fields(), cancel=cancel
        )
        annotation_id = None
        if isinstance(data, dict):
            annotation_id = data.get("id", data.get("item_id"))
        if annotation_id is None:
            annotation_id = timestamp_id()
        persisted = annotation.with_id(annotation_id)
        self._annotations.append(persisted)
        logger.debug("Persisted annotation %s in session %s", annotation_id, session_id)
        return persisted

    def remove(self, index: int) -> Annotation:
        """
        Drop the annotation at ``index`` from local state only.

        No delete call is made, so the server keeps its copy.
        """
        if index < 0:
            raise IndexError(f"annotation index out of range: {index}")
        removed = self._annotations.pop(index)
        logger.warning(
            "Annotation %s removed locally; the server record is not deleted", removed.id
        )
        return removed

    def get(self, index: int) -> Optional[Annotation]:
        if 0 <= index < len(self._annotations):
            return self._annotations[index]
        return None

    @property
    def annotations(self) -> List[Annotation]:
        return list(self._annotations)

    def __len__(self) -> int:
        return len(self._annotations)
