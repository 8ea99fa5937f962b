"""Client-side selection and retrieval workflow."""

from coursehub.workflow.effects import DerivedFetch, EffectRunner
from coursehub.workflow.machine import NO_ANSWER, CourseHubWorkflow, validate_setup
from coursehub.workflow.state import FilesStatus, Phase, View, WorkflowState

__all__ = [
    "CourseHubWorkflow",
    "DerivedFetch",
    "EffectRunner",
    "FilesStatus",
    "NO_ANSWER",
    "Phase",
    "View",
    "WorkflowState",
    "validate_setup",
]
