import os
from typing import Dict
from abc import ABC, abstractmethod
from econstitucional.exceptions import ModelServiceError
from econstitucional.utils.logger import logger


EMPTY_REPLY = "No se generó respuesta"


class LLMClient(ABC):
  """Base class for LLM clients"""

  def __init__(self, config: Dict):
    self.config = config
    api_config = config['models']['api']

    # Get API key from environment
    api_key_env_var = api_config['api_key_env']
    self.api_key = os.environ.get(api_key_env_var)
    if not self.api_key:
      raise ValueError(f"Missing {api_key_env_var} environment variable")

    self.model = api_config['model']
    self.max_tokens = api_config.get('max_tokens', 1024)
    self.temperature = api_config.get('temperature', 0.7)
    self.timeout = api_config.get('timeout', 30)
    self.base_url = api_config.get('base_url')

  @abstractmethod
  def generate(self, system_prompt: str, user_message: str, max_tokens: int = None) -> str:
    """Text generation from a system prompt and one user message"""
    pass


class OpenAIClient(LLMClient):
  """OpenAI-compatible chat completions client (OpenAI, Groq, ...)"""

  def __init__(self, config: Dict):
    from openai import OpenAI

    super().__init__(config)
    # No internal retries: failures go straight back to the caller
    self.client = OpenAI(
      api_key = self.api_key,
      base_url = self.base_url,
      timeout = self.timeout,
      max_retries = 0
    )

  def generate(self, system_prompt: str, user_message: str, max_tokens: int = None) -> str:
    import openai

    try:
      response = self.client.chat.completions.create(
        model = self.model,
        messages = [
          {"role": "system", "content": system_prompt},
          {"role": "user", "content": user_message}
        ],
        max_tokens = max_tokens or self.max_tokens,
        temperature = self.temperature
      )
    except openai.APIStatusError as e:
      logger.error(f"✗ Error del servicio de IA ({e.status_code}): {e.message}")
      raise ModelServiceError(f"Error from AI service: {e.message}", e.status_code) from e
    except openai.APIConnectionError as e:
      logger.error(f"✗ Servicio de IA no disponible: {e}")
      raise ModelServiceError(f"AI service unreachable: {e}") from e

    if not response.choices:
      return EMPTY_REPLY
    return response.choices[0].message.content or EMPTY_REPLY


class AnthropicClient(LLMClient):
  """Anthropic API client"""

  def __init__(self, config: Dict):
    import anthropic

    super().__init__(config)
    self.client = anthropic.Anthropic(
      api_key = self.api_key,
      timeout = self.timeout,
      max_retries = 0
    )

  def generate(self, system_prompt: str, user_message: str, max_tokens: int = None) -> str:
    import anthropic

    try:
      response = self.client.messages.create(
        model = self.model,
        system = system_prompt,
        messages = [{"role": "user", "content": user_message}],
        max_tokens = max_tokens or self.max_tokens,
        temperature = self.temperature
      )
    except anthropic.APIStatusError as e:
      logger.error(f"✗ Error del servicio de IA ({e.status_code}): {e.message}")
      raise ModelServiceError(f"Error from AI service: {e.message}", e.status_code) from e
    except anthropic.APIConnectionError as e:
      logger.error(f"✗ Servicio de IA no disponible: {e}")
      raise ModelServiceError(f"AI service unreachable: {e}") from e

    text = "".join(block.text for block in response.content if block.type == "text")
    return text or EMPTY_REPLY


def create_llm_client(config: Dict) -> LLMClient:
  """Factory function to create the appropriate LLM client"""
  provider = config['models']['api']['provider']

  if provider in ("openai", "groq"):
    return OpenAIClient(config)
  elif provider == "anthropic":
    return AnthropicClient(config)
  else:
    raise ValueError(f"Unknown API provider: {provider}")
