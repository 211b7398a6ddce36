from pathlib import Path


class ProjectRootNotFound(Exception):
    pass


def get_project_root_dir() -> Path:
    """Look for the root pyproject.toml"""
    current = Path(__file__).parent

    while True:
        candidate = current / "pyproject.toml"
        if candidate.exists():
            return current

        parent = current.parent
        if parent == current:
            raise ProjectRootNotFound

        current = parent
