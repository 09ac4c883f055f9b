"""
OpenAPI documentation: fetch the service's schema and summarize its paths.
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from .client import ApiClient

HTTP_METHODS = ("get", "post", "put", "patch", "delete", "options", "head")


@dataclass
class Operation:
    method: str
    path: str
    summary: str = ""
    tag: str = "default"
    requires_auth: bool = False


def fetch_schema(client: ApiClient) -> Dict[str, Any]:
    return client.get(client.endpoints.openapi_schema(), authenticated=False)


def list_operations(schema: Dict[str, Any]) -> List[Operation]:
    """Flatten ``schema["paths"]`` into one entry per (path, method)."""
    global_security = bool(schema.get("security"))
    operations = []
    for path, item in sorted((schema.get("paths") or {}).items()):
        for method in HTTP_METHODS:
            op = item.get(method)
            if op is None:
                continue
            tags = op.get("tags") or ["default"]
            security = op.get("security", None)
            operations.append(
                Operation(
                    method=method.upper(),
                    path=path,
                    summary=op.get("summary") or op.get("description") or "",
                    tag=tags[0],
                    requires_auth=bool(security) if security is not None else global_security,
                )
            )
    return operations


def group_by_tag(operations: List[Operation]) -> Dict[str, List[Operation]]:
    groups: Dict[str, List[Operation]] = {}
    for op in operations:
        groups.setdefault(op.tag, []).append(op)
    return groups


def format_schema(schema: Dict[str, Any], tag: Optional[str] = None) -> str:
    info = schema.get("info") or {}
    lines = [f"{info.get('title', 'API')} {info.get('version', '')}".strip()]
    for server in schema.get("servers") or []:
        lines.append(f"  server: {server.get('url')}")
    for group, ops in group_by_tag(list_operations(schema)).items():
        if tag is not None and group != tag:
            continue
        lines.append("")
        lines.append(f"[{group}]")
        for op in ops:
            lock = " (auth)" if op.requires_auth else ""
            summary = f"  {op.summary}" if op.summary else ""
            lines.append(f"  {op.method:<7} {op.path}{lock}{summary}")
    return "\n".join(lines)
