import json
from pathlib import Path
from typing import Any

from docassist.classification.exceptions import ProfileLoadError

_DEFAULT_PROFILE_DIR = Path(__file__).parent / "profiles"


def load_profile(name: str, directory: Path | None = None) -> dict[str, Any]:
    """Load a document profile from ``<directory>/<name>.json``.

    Args:
        name: Profile file stem, e.g. ``"resume"``.
        directory: Directory holding profile files.
                   Defaults to the bundled ``profiles`` directory.

    Returns:
        The parsed JSON object.

    Raises:
        ProfileLoadError: if the file cannot be read, is not valid JSON,
            or does not contain a JSON object.
    """
    if directory is None:
        directory = _DEFAULT_PROFILE_DIR
    path = directory / f"{name}.json"
    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ProfileLoadError(f"Failed to load profile '{name}': {exc}") from exc

    try:
        parsed = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise ProfileLoadError(f"Invalid JSON in profile '{name}': {exc}") from exc

    if not isinstance(parsed, dict):
        raise ProfileLoadError(f"Profile '{name}' must be a JSON object")
    return parsed
