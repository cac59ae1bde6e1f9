import os
import sys
from pathlib import Path


def get_script_folder() -> Path:
    """Absolute path to the folder of the running script (cwd when unknown)."""
    main_file = getattr(sys.modules.get("__main__"), "__file__", None)
    if not main_file:
        return Path.cwd()
    return Path(main_file).resolve().parent


def get_data_app_dir(folder_name: str = "data_app", create: bool = True) -> Path:
    """Return the directory used to store app data.

    Override:
        Set env var POPVIEW_DATA_DIR to force a specific root directory.

    Args:
        folder_name: Name of the data folder to use.
        create: Whether to create the folder if it does not exist.
    """

    override_root = str(os.environ.get("POPVIEW_DATA_DIR", "") or "").strip()
    if override_root:
        data_dir = Path(override_root) / folder_name
    else:
        data_dir = get_script_folder() / folder_name

    if create:
        data_dir.mkdir(parents=True, exist_ok=True)
    return data_dir


def data_app_path(*parts: str, folder_name: str = "data_app") -> Path:
    """Convenience helper: build a path inside the data directory."""
    return get_data_app_dir(folder_name=folder_name, create=True).joinpath(*parts)
