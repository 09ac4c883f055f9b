"""
Typed request builder for the REST service.

One method per resource/action pair, so callers never assemble paths by hand.
Every method returns a path relative to the configured base URL.
"""

from typing import Union

ResourceId = Union[int, str]

REST_PREFIX = "/api/v1/yolo/rest"
YOLO_PREFIX = "/api/v1/yolo"
WORKFLOW_PREFIX = "/api/v1"


class Endpoints:
    # Auth
    def register(self) -> str:
        return f"{REST_PREFIX}/users/register"

    def login(self) -> str:
        return f"{REST_PREFIX}/users/login"

    def user_me(self) -> str:
        return f"{REST_PREFIX}/users/me"

    # Projects
    def projects(self) -> str:
        return f"{REST_PREFIX}/projects"

    def project(self, project_id: ResourceId) -> str:
        return f"{REST_PREFIX}/projects/{project_id}"

    def project_images(self, project_id: ResourceId) -> str:
        return f"{self.project(project_id)}/images"

    def project_image(self, project_id: ResourceId, image_id: ResourceId) -> str:
        return f"{self.project_images(project_id)}/{image_id}"

    def project_labels(self, project_id: ResourceId) -> str:
        return f"{self.project(project_id)}/labels"

    def project_label(self, project_id: ResourceId, label_id: ResourceId) -> str:
        return f"{self.project_labels(project_id)}/{label_id}"

    # Annotation sessions
    def image_sessions(self, image_id: ResourceId) -> str:
        return f"{REST_PREFIX}/images/{image_id}/sessions"

    def session(self, session_id: ResourceId) -> str:
        return f"{REST_PREFIX}/sessions/{session_id}"

    def session_items(self, session_id: ResourceId) -> str:
        return f"{self.session(session_id)}/items"

    # Public AI models
    def models(self) -> str:
        return f"{YOLO_PREFIX}/models"

    def predict(self, model_id: ResourceId) -> str:
        return f"{YOLO_PREFIX}/predict/{model_id}"

    def ocr(self, model_id: ResourceId) -> str:
        return f"{YOLO_PREFIX}/ocr/{model_id}"

    def dashboard_stats(self) -> str:
        return f"{REST_PREFIX}/dashboard/stats"

    def api_keys(self) -> str:
        return f"{REST_PREFIX}/api-keys"

    def api_key(self, key_id: ResourceId) -> str:
        return f"{self.api_keys()}/{key_id}"

    def openapi_schema(self) -> str:
        return "/openapi.json"

    # Workflows
    def workflows(self) -> str:
        return f"{WORKFLOW_PREFIX}/workflows"

    def workflow(self, workflow_id: ResourceId) -> str:
        return f"{self.workflows()}/{workflow_id}"

    def workflow_steps(self, workflow_id: ResourceId) -> str:
        return f"{self.workflow(workflow_id)}/steps"

    def workflow_step(self, workflow_id: ResourceId, step_id: ResourceId) -> str:
        return f"{self.workflow_steps(workflow_id)}/{step_id}"

    # Jobs
    def jobs(self) -> str:
        return f"{WORKFLOW_PREFIX}/jobs"

    def job(self, job_id: ResourceId) -> str:
        return f"{self.jobs()}/{job_id}"

    def job_steps(self, job_id: ResourceId) -> str:
        return f"{self.job(job_id)}/steps"

    def job_execute(self) -> str:
        return f"{self.jobs()}/execute"

    def workflow_models(self) -> str:
        return f"{WORKFLOW_PREFIX}/models"
