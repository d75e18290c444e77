"""Prompt Construction Package"""

from autocommit.prompts.builder import ExplanationPromptBuilder, PromptConfig

__all__ = ["ExplanationPromptBuilder", "PromptConfig"]
