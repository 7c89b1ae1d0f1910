"""
Integrations with external services.

- generation_client: HTTP client for the quiz generation service
"""

from quizgate.integrations.generation_client import GenerationClient

__all__ = ["GenerationClient"]
