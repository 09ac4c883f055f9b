"""
Clients for the annotation service's REST API.
"""

from .auth import AuthService
from .auth_session import AuthSession, CredentialStore
from .client import ApiClient
from .endpoints import Endpoints
from .models import ModelsClient
from .projects import ProjectsClient
from .workflows import JobStatus, StepType, WorkflowsClient

__all__ = [
    "AuthService",
    "AuthSession",
    "CredentialStore",
    "ApiClient",
    "Endpoints",
    "ModelsClient",
    "ProjectsClient",
    "JobStatus",
    "StepType",
    "WorkflowsClient",
]
