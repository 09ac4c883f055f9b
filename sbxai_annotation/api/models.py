"""
Public AI model calls: listing, object detection and OCR.

These endpoints do not require a bearer token.
"""

import mimetypes
from pathlib import Path
from typing import Any, Dict, List

from .client import ApiClient


class ModelsClient:
    def __init__(self, client: ApiClient):
        self.client = client
        self.endpoints = client.endpoints

    def list_models(self) -> List[Dict[str, Any]]:
        data = self.client.get(self.endpoints.models(), authenticated=False)
        return (data or {}).get("models") or []

    def predict(self, model_id, path, confidence: float = 0.25) -> Dict[str, Any]:
        return self._run(self.endpoints.predict(model_id), path, confidence)

    def ocr(self, model_id, path, confidence: float = 0.25) -> Dict[str, Any]:
        return self._run(self.endpoints.ocr(model_id), path, confidence)

    def _run(self, endpoint: str, path, confidence: float) -> Dict[str, Any]:
        path = Path(path)
        content_type = mimetypes.guess_type(path.name)[0] or "application/octet-stream"
        with path.open("rb") as handle:
            return self.client.post(
                endpoint,
                form={"confidence": confidence},
                files=[("file", (path.name, handle, content_type))],
                authenticated=False,
            )
