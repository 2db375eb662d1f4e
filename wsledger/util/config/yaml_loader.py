# SPDX-License-Identifier: GPLv3-or-later
# Copyright © 2025 pygaindalf Rui Pinheiro

import os
import pathlib

from typing import IO, Any

import yaml


class IncludeLoader(yaml.SafeLoader):
    """Safe YAML loader with an ``!include <path>`` tag, resolved relative to the including file."""

    def __init__(self, stream: IO[str] | str, root: pathlib.Path | None = None) -> None:
        if root is None:
            name = getattr(stream, "name", None)
            root = pathlib.Path(name).resolve().parent if isinstance(name, str) else pathlib.Path.cwd()

        self._root: pathlib.Path = root

        super().__init__(stream)

    def include(self, node: yaml.Node) -> Any:
        filename = self._root / os.path.expandvars(str(self.construct_scalar(node)))  # pyright: ignore[reportArgumentType]
        filename = filename.expanduser()

        with filename.open(encoding="UTF-8") as f:
            return yaml.load(f, IncludeLoader)  # noqa: S506 as IncludeLoader extends yaml.SafeLoader


IncludeLoader.add_constructor("!include", IncludeLoader.include)
