"""
bingwall State

The state file holds the whole image catalog plus the file name of the "current" image as a single
JSON document:

    {"image_data": {"images": [...]}, "current_image": "<file name or null>"}

State is read once at the start of a command, changed in memory and written back in full at the
end. There is no locking, the last writer wins.
"""

import json
from dataclasses import dataclass
from dataclasses import field
from pathlib import Path
from typing import Optional

from bingwall.image_data import ImageData
from bingwall.image_data import ImageDataError


class StateError(Exception):
    """Raise when the state file cannot be read or written."""

    pass


class NoCurrentImageError(Exception):
    """Raise when the current image is asked for but none has been picked yet."""

    pass


@dataclass
class AppState:
    image_data: ImageData = field(default_factory=ImageData)
    current_image: Optional[str] = None

    @classmethod
    def from_json(cls, data: dict) -> "AppState":
        if not isinstance(data, dict):
            raise StateError("Expected a JSON object at the top level of the state file.")

        current_image = data.get("current_image")
        if current_image is not None and not isinstance(current_image, str):
            raise StateError(f"Invalid current image: {current_image!r}")

        try:
            image_data = ImageData.from_json(data.get("image_data"))

        except ImageDataError as error:
            raise StateError(f"Invalid image data in state file: {error}")

        return cls(image_data=image_data, current_image=current_image)

    def to_json(self) -> dict:
        return {
            "image_data": self.image_data.to_json(),
            "current_image": self.current_image,
        }


def load_state(path: Path) -> AppState:
    """
    Load the state file at path. A missing file is not an error: a fresh, empty AppState is returned
    instead. Raise StateError if the file exists but does not hold a valid state document.
    """

    path = Path(path)
    if not path.exists():
        return AppState()

    try:
        with path.open("r", encoding="utf-8") as file:
            from_json = json.load(file)

    except (json.JSONDecodeError, UnicodeDecodeError) as error:
        raise StateError(f"There was an issue reading the state file {path}: {error}")

    except OSError as error:
        raise StateError(f"There was an issue opening the state file {path}: {error}")

    return AppState.from_json(from_json)


def save_state(path: Path, state: AppState) -> Path:
    """
    Serialize state as pretty JSON and overwrite the file at path. Returns the path written.
    """

    path = Path(path)
    to_json = json.dumps(state.to_json(), indent=2)

    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with path.open("w", encoding="utf-8") as file:
            file.write(to_json)

    except OSError as error:
        raise StateError(f"There was an error saving the state file {path}: {error}")

    return path
