"""Shared runtime pieces: progress reporting."""

from .progress import ProgressCallback, ProgressCounter, ProgressReporter, SilentReporter

__all__ = ["ProgressCallback", "ProgressCounter", "ProgressReporter", "SilentReporter"]
