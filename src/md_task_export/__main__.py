"""Allow running as ``python -m md_task_export``."""

from .cli import main

main(prog_name="md-task-export")
