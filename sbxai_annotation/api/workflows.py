"""
Workflow, job and model-registry calls used by the monitoring views.
"""

import logging
import mimetypes
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Optional

from .client import ApiClient

logger = logging.getLogger(__name__)


class JobStatus(Enum):
    PENDING = "pending"
    RUNNING = "running"
    COMPLETED = "completed"
    FAILED = "failed"


class StepType(Enum):
    DETECT = "detect"
    CROP = "crop"
    OCR = "ocr"
    OTHER = "other"


def _value(item):
    return item.value if isinstance(item, Enum) else item


class WorkflowsClient:
    def __init__(self, client: ApiClient):
        self.client = client
        self.endpoints = client.endpoints

    # Workflows

    def list_workflows(self) -> List[Dict[str, Any]]:
        return self.client.get(self.endpoints.workflows()) or []

    def get_workflow(self, workflow_id) -> Dict[str, Any]:
        return self.client.get(self.endpoints.workflow(workflow_id))

    def create_workflow(self, name: str, description: Optional[str] = None) -> Dict[str, Any]:
        return self.client.post(
            self.endpoints.workflows(), json={"name": name, "description": description}
        )

    def update_workflow(
        self, workflow_id, name: str, description: Optional[str] = None
    ) -> Dict[str, Any]:
        return self.client.put(
            self.endpoints.workflow(workflow_id),
            json={"name": name, "description": description},
        )

    def delete_workflow(self, workflow_id) -> Any:
        return self.client.delete(self.endpoints.workflow(workflow_id))

    # Workflow steps

    def list_steps(self, workflow_id) -> List[Dict[str, Any]]:
        return self.client.get(self.endpoints.workflow_steps(workflow_id)) or []

    def create_step(
        self,
        workflow_id,
        step_order: int,
        step_type,
        model_name: str,
        config_json: Optional[Dict[str, Any]] = None,
    ) -> Dict[str, Any]:
        return self.client.post(
            self.endpoints.workflow_steps(workflow_id),
            json={
                "step_order": step_order,
                "step_type": _value(step_type),
                "model_name": model_name,
                "config_json": config_json,
            },
        )

    def update_step(
        self,
        workflow_id,
        step_id,
        step_order: int,
        step_type,
        model_name: str,
        config_json: Optional[Dict[str, Any]] = None,
    ) -> Dict[str, Any]:
        return self.client.put(
            self.endpoints.workflow_step(workflow_id, step_id),
            json={
                "step_order": step_order,
                "step_type": _value(step_type),
                "model_name": model_name,
                "config_json": config_json,
            },
        )

    def delete_step(self, workflow_id, step_id) -> Any:
        return self.client.delete(self.endpoints.workflow_step(workflow_id, step_id))

    # Jobs

    def list_jobs(
        self, status=None, workflow_id=None, limit: Optional[int] = None
    ) -> List[Dict[str, Any]]:
        params = {
            "status": _value(status) if status else None,
            "workflow_id": workflow_id,
            "limit": limit,
        }
        return self.client.get(self.endpoints.jobs(), params=params) or []

    def get_job(self, job_id) -> Dict[str, Any]:
        return self.client.get(self.endpoints.job(job_id))

    def create_job(self, workflow_id, input_image_path: str) -> Dict[str, Any]:
        return self.client.post(
            self.endpoints.jobs(),
            json={"workflow_id": workflow_id, "input_image_path": input_image_path},
        )

    def list_job_steps(self, job_id) -> List[Dict[str, Any]]:
        return self.client.get(self.endpoints.job_steps(job_id)) or []

    def execute_with_file(self, workflow_id, path) -> Dict[str, Any]:
        """Upload an image and start a job of ``workflow_id`` on it."""
        path = Path(path)
        content_type = mimetypes.guess_type(path.name)[0] or "application/octet-stream"
        with path.open("rb") as handle:
            logger.info("Executing workflow %s on %s", workflow_id, path.name)
            return self.client.post(
                self.endpoints.job_execute(),
                form={"workflow_id": workflow_id},
                files=[("file", (path.name, handle, content_type))],
            )

    # Model registry

    def list_models(self, model_type=None) -> List[Dict[str, Any]]:
        params = {"model_type": _value(model_type) if model_type else None}
        return self.client.get(self.endpoints.workflow_models(), params=params) or []

    def create_model(
        self, name: str, path: str, model_type, version: Optional[str] = None
    ) -> Dict[str, Any]:
        return self.client.post(
            self.endpoints.workflow_models(),
            json={"name": name, "path": path, "version": version, "type": _value(model_type)},
        )
