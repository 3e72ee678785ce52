from __future__ import annotations

import json
from pathlib import Path
from typing import Union

from .model import Model


PathLike = Union[str, Path]


def load_json(path: PathLike) -> Model:
    """Read a model saved by :func:`save_json`.

    Payloads from a different major format version are rejected with
    ``ValueError``; a missing ``version`` is read as the current one.
    """
    path = Path(path)
    data = json.loads(path.read_text(encoding="utf-8"))
    version = str(data.get("version", Model.VERSION))
    if _major(version) != _major(Model.VERSION):
        raise ValueError(
            f"{path}: unsupported format version {version!r} (expected {Model.VERSION})"
        )
    return Model.from_dict(data)


def save_json(model: Model, path: PathLike, include_adjacency: bool = True) -> None:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(model.to_json(include_adjacency=include_adjacency), encoding="utf-8")


def _major(version: str) -> str:
    return version.split(".", 1)[0]
