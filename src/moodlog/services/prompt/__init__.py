"""Prompt construction for transcript analysis."""

from moodlog.services.prompt.prompt_builder import PromptBuilder

__all__ = ["PromptBuilder"]
