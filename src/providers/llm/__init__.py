"""LLM provider adapters.

OpenAILLMProvider implements ILLMProvider (src/interfaces/llm_provider.py)
for OpenAI and any OpenAI-compatible endpoint.  main.py builds it from
Settings and hands it to the SummarizerService.
"""

from src.providers.llm.openai_provider import OpenAILLMProvider

__all__ = ["OpenAILLMProvider"]
