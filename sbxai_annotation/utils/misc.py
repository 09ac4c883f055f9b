import importlib.util
import time
from pathlib import Path

from tqdm import tqdm


def load_module(script_path: Path, module_name="module"):
    script_path = Path(script_path)
    locations = None
    if script_path.name == "__init__.py":
        # relative imports inside the package need its search location
        locations = [str(script_path.parent)]
    spec = importlib.util.spec_from_file_location(
        module_name, str(script_path), submodule_search_locations=locations
    )
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


def timestamp_id() -> int:
    """Millisecond wall-clock id, used when the server does not echo one."""
    return int(time.time() * 1000)


def try_tqdm(iterable, **kwargs):
    # disable=None turns the bar off when stderr is not a terminal
    kwargs.setdefault("disable", None)
    return tqdm(iterable, **kwargs)
