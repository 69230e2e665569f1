"""Orchestration processors for coordinating services."""

from .translation_pipeline import TranslationPipeline

__all__ = ["TranslationPipeline"]
