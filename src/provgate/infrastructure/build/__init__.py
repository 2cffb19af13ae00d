from .runner import BuildOutcome, BuildRunner

__all__ = ["BuildOutcome", "BuildRunner"]
