"""
Projects, images, labels and annotation-session calls.
"""

import logging
import mimetypes
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional

from ..utils.cancel import CancelToken
from .client import ApiClient

logger = logging.getLogger(__name__)


class ProjectsClient:
    def __init__(self, client: ApiClient):
        self.client = client
        self.endpoints = client.endpoints

    # Projects

    def list_projects(self, limit: Optional[int] = 50) -> List[Dict[str, Any]]:
        data = self.client.get(self.endpoints.projects(), params={"limit": limit})
        return (data or {}).get("projects") or []

    def get_project(self, project_id) -> Dict[str, Any]:
        return self.client.get(self.endpoints.project(project_id))

    def create_project(self, name: str) -> Dict[str, Any]:
        return self.client.post(self.endpoints.projects(), json={"name": name})

    def delete_project(self, project_id) -> Any:
        return self.client.delete(self.endpoints.project(project_id))

    # Images

    def list_images(
        self,
        project_id,
        limit: Optional[int] = None,
        offset: Optional[int] = None,
        cancel: Optional[CancelToken] = None,
    ) -> List[Dict[str, Any]]:
        data = self.client.get(
            self.endpoints.project_images(project_id),
            params={"limit": limit, "offset": offset},
            cancel=cancel,
        )
        return (data or {}).get("images") or []

    def upload_images(self, project_id, paths: Iterable[Path]) -> Dict[str, Any]:
        """Upload image files in one multipart request (repeated ``files`` field)."""
        handles = []
        try:
            files = []
            for path in paths:
                path = Path(path)
                handle = path.open("rb")
                handles.append(handle)
                content_type = mimetypes.guess_type(path.name)[0] or "application/octet-stream"
                files.append(("files", (path.name, handle, content_type)))
            logger.info("Uploading %d image(s) to project %s", len(files), project_id)
            return self.client.post(self.endpoints.project_images(project_id), files=files)
        finally:
            for handle in handles:
                handle.close()

    def delete_image(self, project_id, image_id) -> Any:
        return self.client.delete(self.endpoints.project_image(project_id, image_id))

    # Labels

    def list_labels(self, project_id, cancel: Optional[CancelToken] = None) -> List[Dict[str, Any]]:
        data = self.client.get(self.endpoints.project_labels(project_id), cancel=cancel)
        return (data or {}).get("labels") or []

    def create_label(
        self,
        project_id,
        name: str,
        expected_format: str = "bbox",
        color: str = "#FF0000",
        description: str = "",
    ) -> Dict[str, Any]:
        return self.client.post(
            self.endpoints.project_labels(project_id),
            json={
                "name": name,
                "description": description,
                "expected_format": expected_format,
                "color": color,
            },
        )

    def delete_label(self, project_id, label_id) -> Any:
        return self.client.delete(self.endpoints.project_label(project_id, label_id))

    # Annotation sessions

    def create_session(
        self, image_id, source: str = "manual", cancel: Optional[CancelToken] = None
    ) -> Dict[str, Any]:
        return self.client.post(
            self.endpoints.image_sessions(image_id),
            form={"source": source},
            cancel=cancel,
        )

    def list_session_items(
        self, session_id, cancel: Optional[CancelToken] = None
    ) -> List[Dict[str, Any]]:
        data = self.client.get(self.endpoints.session_items(session_id), cancel=cancel)
        return (data or {}).get("items") or []

    def create_session_item(
        self, session_id, fields: Dict[str, Any], cancel: Optional[CancelToken] = None
    ) -> Any:
        return self.client.post(
            self.endpoints.session_items(session_id), form=fields, cancel=cancel
        )

    # Dashboard

    def dashboard_stats(self) -> Dict[str, Any]:
        return self.client.get(self.endpoints.dashboard_stats())
