from pathlib import Path

from portal import config


def test_resource_path_is_under_project_root() -> None:
    root = Path(config.__file__).resolve().parent.parent

    assert config._resource_path("static") == root / "static"
    assert (root / "portal" / "config.py").is_file()
