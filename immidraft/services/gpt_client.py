"""
OpenAI chat completion client
"""
import time
from typing import List, Dict, Any, Optional
from openai import OpenAI
from openai import RateLimitError, APIError, APIConnectionError, APITimeoutError
from config.settings import settings
from immidraft.utils.logger import get_logger
from immidraft.utils.exceptions import GPTAPIError

logger = get_logger(__name__)


class GPTClient:
    """Thin wrapper around the OpenAI SDK with retry"""

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: Optional[str] = None,
        max_retries: int = 3,
        retry_delay: float = 1.0
    ):
        """
        Args:
            api_key: OpenAI API key (defaults to settings)
            model: model name (defaults to settings)
            max_retries: maximum attempts for retryable errors
            retry_delay: base delay in seconds for exponential backoff
        """
        self.api_key = api_key or settings.openai_api_key
        self.model = model or settings.openai_model
        self.max_retries = max_retries
        self.retry_delay = retry_delay

        self.client = OpenAI(api_key=self.api_key)
        logger.info(f"GPT client initialized: model={self.model}")

    def _retry_with_backoff(self, func, *args, **kwargs):
        """
        Call ``func`` retrying rate-limit and connection errors

        Returns:
            the function's result

        Raises:
            GPTAPIError: on a non-retryable API error or when retries run out
        """
        last_exception = None

        for attempt in range(self.max_retries):
            try:
                return func(*args, **kwargs)

            except (RateLimitError, APIConnectionError, APITimeoutError) as e:
                wait_time = self.retry_delay * (2 ** attempt)
                logger.warning(
                    f"{type(e).__name__} (attempt {attempt + 1}/{self.max_retries}), "
                    f"retrying in {wait_time}s..."
                )
                time.sleep(wait_time)
                last_exception = e

            except APIError as e:
                logger.error(f"GPT API error: {str(e)}")
                raise GPTAPIError(str(e), status_code=getattr(e, 'status_code', None))

        raise GPTAPIError(
            f"max retries exceeded: {str(last_exception)}",
            status_code=getattr(last_exception, 'status_code', None) if last_exception else None
        )

    def chat_completion(
        self,
        messages: List[Dict[str, str]],
        temperature: float = 0.7,
        max_tokens: Optional[int] = None,
        **kwargs
    ) -> Dict[str, Any]:
        """
        Call the Chat Completions API

        Args:
            messages: chat messages
            temperature: sampling temperature
            max_tokens: completion token limit
            **kwargs: passed through to the SDK (response_format, timeout, ...)

        Returns:
            dict with content, role, usage, model and finish_reason
        """
        def _call():
            return self.client.chat.completions.create(
                model=self.model,
                messages=messages,
                temperature=temperature,
                max_tokens=max_tokens,
                **kwargs
            )

        try:
            response = self._retry_with_backoff(_call)

            result = {
                "content": response.choices[0].message.content,
                "role": response.choices[0].message.role,
                "usage": {
                    "prompt_tokens": response.usage.prompt_tokens,
                    "completion_tokens": response.usage.completion_tokens,
                    "total_tokens": response.usage.total_tokens
                },
                "model": response.model,
                "finish_reason": response.choices[0].finish_reason
            }

            logger.debug(f"Chat completion succeeded: tokens={result['usage']['total_tokens']}")
            return result

        except Exception as e:
            logger.error(f"Chat completion failed: {str(e)}")
            raise

    def complete(
        self,
        prompt: str,
        system_prompt: Optional[str] = None,
        temperature: float = 0.3,
        max_tokens: Optional[int] = None,
        **kwargs
    ) -> str:
        """
        Single-prompt convenience wrapper returning only the text

        Args:
            prompt: user prompt
            system_prompt: optional system instruction
            temperature: sampling temperature
            max_tokens: completion token limit

        Returns:
            stripped response content ("" when the model returned nothing)
        """
        messages = []
        if system_prompt:
            messages.append({"role": "system", "content": system_prompt})
        messages.append({"role": "user", "content": prompt})

        response = self.chat_completion(
            messages=messages,
            temperature=temperature,
            max_tokens=max_tokens,
            **kwargs
        )
        return (response["content"] or "").strip()


# Global GPT client instance
gpt_client = GPTClient()
