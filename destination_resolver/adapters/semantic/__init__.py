"""Semantic matcher adapters - Implementations of SemanticMatcherPort.

Available implementations:
- OpenAISemanticMatcher: OpenAI chat completions with JSON answers
"""

from .openai_adapter import OpenAISemanticMatcher

__all__ = ["OpenAISemanticMatcher"]
