"""Load-stage node with an interface panel of typed parameters."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Union

from usdviewkit.renderer import USDRenderer

logger = logging.getLogger(__name__)

USD_FILE_FILTER = "USD Files (*.usd *.usda *.usdc *.usdz)"
EMPTY_STAGE = "Empty USD Stage"
INVALID_STAGE = "Invalid USD Stage"


@dataclass(frozen=True)
class FilePathParameter:
    """A file path with a file-dialog filter."""

    value: str
    filter: str = USD_FILE_FILTER


@dataclass(frozen=True)
class BooleanParameter:
    value: bool


@dataclass(frozen=True)
class StringParameter:
    value: str


InterfaceParameter = Union[FilePathParameter, BooleanParameter, StringParameter]


def _string_of(parameter: Any) -> str | None:
    if isinstance(parameter, (FilePathParameter, StringParameter)):
        return parameter.value
    return None


def _bool_of(parameter: Any) -> bool | None:
    if isinstance(parameter, BooleanParameter):
        return parameter.value
    return None


def process_with_parameters(
    file_path: str, auto_reload: bool, load_payloads: bool, population_mask: str
) -> list[str]:
    """Load the stage at ``file_path`` and return a one-item list describing it."""
    if not file_path:
        logger.info("No USD file selected")
        return [EMPTY_STAGE]
    if not Path(file_path).exists():
        logger.error("USD file not found: %s", file_path)
        return [INVALID_STAGE]
    stage_id = f"file://{file_path}"
    USDRenderer().load_stage(stage_id)
    return [f"USDScene:{stage_id}"]


@dataclass
class LoadStageNode:
    """Interface panel for loading a USD stage from a file."""

    file_path: str = ""
    auto_reload: bool = False
    load_payloads: bool = True
    population_mask: str = ""
    last_execution_result: str | None = None

    title = "USD Load Stage"

    def get_parameters(self) -> list[tuple[str, InterfaceParameter]]:
        """Return the panel parameters in display order."""
        return [
            ("file_path", FilePathParameter(self.file_path)),
            ("auto_reload", BooleanParameter(self.auto_reload)),
            ("load_payloads", BooleanParameter(self.load_payloads)),
            ("population_mask", StringParameter(self.population_mask)),
        ]

    def set_parameters(self, parameters) -> None:
        """Apply named parameters; unknown names and mismatched kinds are ignored."""
        for name, parameter in parameters:
            if name in ("file_path", "population_mask"):
                text = _string_of(parameter)
                if text is not None:
                    setattr(self, name, text)
            elif name in ("auto_reload", "load_payloads"):
                flag = _bool_of(parameter)
                if flag is not None:
                    setattr(self, name, flag)

    def select_file(self, path: str) -> None:
        """Choose a new file and forget the previous result."""
        self.file_path = path
        self.last_execution_result = None

    def process(self, inputs: list[Any]) -> list[str]:
        """Load the stage named by this node's own parameters."""
        return process_with_parameters(
            self.file_path, self.auto_reload, self.load_payloads, self.population_mask
        )

    def refresh(self) -> bool:
        """Load the chosen file once if it exists; return True if the result changed."""
        if not self.file_path or not Path(self.file_path).exists():
            return False
        if self.last_execution_result is not None:
            return False
        results = self.process([])
        if not results:
            return False
        self.last_execution_result = results[-1]
        return True