"""Application services."""

from .workflow import (
    INPUT_OBJECT_NAME,
    NO_FILE_MESSAGE,
    OUTPUT_OBJECT_NAME,
    SummaryWorkflow,
    configure_workflow,
    get_workflow,
    summary_template,
)

__all__ = [
    "INPUT_OBJECT_NAME",
    "NO_FILE_MESSAGE",
    "OUTPUT_OBJECT_NAME",
    "SummaryWorkflow",
    "configure_workflow",
    "get_workflow",
    "summary_template",
]
