"""Run execution domain exports."""

from .generation_run_use_case import RunExecutionError, execute_generation_run, generate_modules
from .run_contracts import GeneratedModules, GenerationRequest, RunOutcome, SkippedDefinition

__all__ = [
    "GenerationRequest",
    "GeneratedModules",
    "RunOutcome",
    "SkippedDefinition",
    "RunExecutionError",
    "execute_generation_run",
    "generate_modules",
]
