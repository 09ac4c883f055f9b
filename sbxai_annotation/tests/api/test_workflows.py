"""
Tests for WorkflowsClient: workflows, steps, jobs and the model registry.
"""

from sbxai_annotation.api import JobStatus, StepType, WorkflowsClient


def test_workflow_crud(client, http):
    http.route("GET", "/api/v1/workflows", [{"id": 1, "name": "plates"}])
    http.route("POST", "/api/v1/workflows", {"id": 2})
    http.route("PUT", "/api/v1/workflows/2", {"id": 2, "name": "renamed"})
    http.route("DELETE", "/api/v1/workflows/2", None)
    workflows = WorkflowsClient(client)

    assert workflows.list_workflows() == [{"id": 1, "name": "plates"}]
    assert workflows.create_workflow("plates v2")["id"] == 2
    assert workflows.update_workflow(2, name="renamed")["name"] == "renamed"
    workflows.delete_workflow(2)

    assert [c.method for c in http.calls] == ["GET", "POST", "PUT", "DELETE"]


def test_create_step_serializes_enum(client, http):
    http.route("POST", "/api/v1/workflows/1/steps", {"id": 10})
    WorkflowsClient(client).create_step(
        1, step_order=1, step_type=StepType.DETECT, model_name="yolov8n",
        config_json={"conf": 0.3},
    )
    payload = http.calls[0].kwargs["json"]
    assert payload["step_type"] == "detect"
    assert payload["step_order"] == 1
    assert payload["model_name"] == "yolov8n"
    assert payload["config_json"] == {"conf": 0.3}


def test_list_jobs_filters(client, http):
    http.route("GET", "/api/v1/jobs", [{"id": 4, "status": "failed"}])
    jobs = WorkflowsClient(client).list_jobs(status=JobStatus.FAILED, workflow_id=1)
    assert jobs == [{"id": 4, "status": "failed"}]
    assert http.calls[0].kwargs["params"] == {"status": "failed", "workflow_id": 1}


def test_job_steps(client, http):
    http.route("GET", "/api/v1/jobs/4", {"id": 4})
    http.route("GET", "/api/v1/jobs/4/steps", [{"step_order": 1, "status": "completed"}])
    workflows = WorkflowsClient(client)
    assert workflows.get_job(4) == {"id": 4}
    assert workflows.list_job_steps(4)[0]["status"] == "completed"


def test_execute_with_file(client, http, tmp_path):
    image = tmp_path / "car.jpg"
    image.write_bytes(b"jpeg")
    http.route("POST", "/api/v1/jobs/execute", {"id": 5, "status": "pending"})

    job = WorkflowsClient(client).execute_with_file(1, image)

    assert job["status"] == "pending"
    call = http.calls[0]
    assert call.form() == {"workflow_id": "1"}
    assert call.uploads() == [("file", "car.jpg")]


def test_model_registry(client, http):
    http.route("GET", "/api/v1/models", [{"id": 1}])
    http.route("POST", "/api/v1/models", {"id": 2})
    workflows = WorkflowsClient(client)

    assert workflows.list_models(model_type=StepType.OCR) == [{"id": 1}]
    assert http.calls[0].kwargs["params"] == {"model_type": "ocr"}
    workflows.create_model("plates", "/models/plates.pt", StepType.OCR, version="1")
    assert http.calls[1].kwargs["json"]["type"] == "ocr"
