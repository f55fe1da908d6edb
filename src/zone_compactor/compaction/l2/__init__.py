"""Orchestration for a full compaction run."""

from .runner import CompactionInputs, CompactionResult, CompactionRunner, CompactionStats

__all__ = ["CompactionInputs", "CompactionResult", "CompactionRunner", "CompactionStats"]
