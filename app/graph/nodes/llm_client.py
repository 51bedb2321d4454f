"""Shared Cerebras LLM client for the extraction nodes."""

import os

from cerebras.cloud.sdk import Cerebras

from app import config

_client: Cerebras | None = None


def get_cerebras_client() -> Cerebras:
    """Return a cached Cerebras client, initialised on first call.

    Raises:
        RuntimeError: If CEREBRAS_API_KEY is not set.
    """
    global _client
    if _client is None:
        api_key = os.getenv("CEREBRAS_API_KEY")
        if not api_key:
            raise RuntimeError("CEREBRAS_API_KEY environment variable is not set.")
        _client = Cerebras(api_key=api_key)
    return _client


def call_llm(system_prompt: str, user_content: str) -> str:
    """Send a chat completion request to Cerebras and return raw content.

    Args:
        system_prompt: The system-level instruction.
        user_content: The user-level input text.

    Returns:
        The raw string content from the LLM response, stripped. Empty when
        the model returned no content.

    Raises:
        RuntimeError: If the client cannot be created.
        IndexError: If the response carries no choices.
    """
    client = get_cerebras_client()
    response = client.chat.completions.create(
        model=config.CEREBRAS_MODEL,
        messages=[
            {"role": "system", "content": system_prompt},
            {"role": "user", "content": user_content},
        ],
        temperature=0,
        top_p=1,
        stream=False,
    )
    return (response.choices[0].message.content or "").strip()
