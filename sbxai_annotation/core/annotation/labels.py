"""
Label registry: the project's label definitions for one editing session.
"""

import logging
from typing import Iterator, List, Optional

from ...errors import MalformedResponse
from .state import Label

logger = logging.getLogger(__name__)


class LabelRegistry:
    """
    In-memory list of labels fetched once per editor view.

    ``load`` does not retry and does not swallow errors. On failure the
    registry is left empty and the caller decides how to surface the error.
    """

    def __init__(self, projects):
        self.projects = projects
        self._labels: List[Label] = []

    def load(self, project_id, cancel=None) -> List[Label]:
        """
        Fetch the labels of ``project_id``.

        Raises:
            NetworkError: the request could not complete
            AuthError: the bearer token was rejected
            MalformedResponse: a label record could not be parsed
        """
        self._labels = []
        raw = self.projects.list_labels(project_id, cancel=cancel)
        try:
            labels = [Label.from_dict(item) for item in raw]
        except (AttributeError, KeyError, TypeError, ValueError) as e:
            raise MalformedResponse(f"Unreadable label in project {project_id}: {e!r}") from e
        self._labels = labels
        logger.debug("Loaded %d label(s) for project %s", len(self._labels), project_id)
        return list(self._labels)

    def get(self, label_id: int) -> Optional[Label]:
        for label in self._labels:
            if label.id == label_id:
                return label
        return None

    def clear(self):
        self._labels = []

    @property
    def labels(self) -> List[Label]:
        return list(self._labels)

    def __iter__(self) -> Iterator[Label]:
        return iter(list(self._labels))

    def __len__(self) -> int:
        return len(self._labels)
