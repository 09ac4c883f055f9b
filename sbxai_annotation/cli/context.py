"""
Objects shared by the subcommands: configuration, stored login and clients.
"""

from dataclasses import dataclass

from easydict import EasyDict as edict

from sbxai_annotation.api import (
    ApiClient,
    AuthService,
    CredentialStore,
    ProjectsClient,
    WorkflowsClient,
)
from sbxai_annotation.config import load_config


@dataclass
class CliContext:
    cfg: edict
    store: CredentialStore
    client: ApiClient

    @property
    def auth(self) -> AuthService:
        return AuthService(self.client, self.store)

    @property
    def projects(self) -> ProjectsClient:
        return ProjectsClient(self.client)

    @property
    def workflows(self) -> WorkflowsClient:
        return WorkflowsClient(self.client)


def build_context(args, env=None, http=None) -> CliContext:
    cfg = load_config(env)
    base_url = getattr(args, "base_url", None)
    if base_url:
        cfg.api.base_url = base_url
    store = CredentialStore(cfg.auth.credentials_path)
    client = ApiClient.from_config(cfg, auth=store.load(), http=http)
    return CliContext(cfg=cfg, store=store, client=client)
