from typing import Any

from rich.markup import escape
from rich.progress import Progress, TaskID

from gdcf.core.protocols import ProgressCallback


class RichProgressCallback(ProgressCallback):
    """Drive a rich progress task from scanner updates."""

    def __init__(self, progress: Progress, task_id: TaskID) -> None:
        self.progress = progress
        self.task_id = task_id

    def update(self, message: str, **fields: Any) -> None:
        # Godot file names may contain brackets, e.g. `level[boss].gd`
        self.progress.update(self.task_id, description=escape(message), **fields)
