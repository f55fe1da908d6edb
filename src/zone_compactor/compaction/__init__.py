"""Public surface for zone compaction (blob + fixed-record index)."""

from .l2.runner import CompactionInputs, CompactionResult, CompactionRunner

__all__ = ["CompactionInputs", "CompactionResult", "CompactionRunner"]
