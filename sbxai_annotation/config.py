"""
Default configuration, overridable through ``SBXAI_*`` environment variables.
"""

import os
from pathlib import Path
from typing import Dict, Optional

from easydict import EasyDict as edict

from .utils.env import load_cfg_from_env

STORAGE_KEYS = edict(
    access_token="sbxai_access_token",
    user_data="sbxai_user_data",
)


def default_config() -> edict:
    return edict(
        api=edict(
            base_url="http://localhost:8000",
            timeout=None,
        ),
        auth=edict(
            credentials_path=str(Path.home() / ".config" / "sbxai" / "credentials.json"),
        ),
        editor=edict(
            min_bbox_size=5,
            scale_min=0.1,
            scale_max=3.0,
            scale_step=0.1,
            session_source="manual",
        ),
        render=edict(
            grid_size=20,
            background="#f0f0f0",
            grid_color="#e0e0e0",
            fill_alpha=0.2,
            line_width=2,
        ),
    )


def load_config(env: Optional[Dict[str, str]] = None) -> edict:
    if env is None:
        env = dict(os.environ)
    return load_cfg_from_env(default_config(), env)
