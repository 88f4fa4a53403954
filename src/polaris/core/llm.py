"""
LLM Integration - Ollama, OpenAI and Anthropic API calls.

Provides a single text-generation entry point. The response is returned as
plain text; action tags inside it are handled by polaris.actions.
"""

from typing import Any

from polaris.core.config import settings, get_logger

logger = get_logger("core.llm")


async def call_llm(
    prompt: str,
    system_prompt: str | None = None,
    provider: str | None = None,
    model: str | None = None,
    temperature: float = 0.7,
    max_tokens: int = 4000,
) -> str:
    """
    Call the LLM with the given prompt.

    Args:
        prompt: The user prompt
        system_prompt: Optional system prompt (instructions)
        provider: 'ollama', 'openai' or 'anthropic' (defaults to settings)
        model: Model name (defaults to settings)
        temperature: Sampling temperature
        max_tokens: Maximum tokens in response

    Returns:
        Response text
    """
    provider = provider or settings.default_llm

    if provider == "ollama":
        return await _call_openai_compatible(
            prompt=prompt,
            system_prompt=system_prompt,
            model=model or settings.ollama_model,
            temperature=temperature,
            max_tokens=max_tokens,
            base_url=settings.ollama_base_url,
            # Required by the client, ignored by Ollama
            api_key="ollama",
        )
    elif provider == "openai":
        return await _call_openai_compatible(
            prompt=prompt,
            system_prompt=system_prompt,
            model=model or settings.openai_model,
            temperature=temperature,
            max_tokens=max_tokens,
            base_url=None,
            api_key=settings.openai_api_key,
        )
    elif provider == "anthropic":
        return await _call_anthropic(
            prompt=prompt,
            system_prompt=system_prompt,
            model=model or settings.anthropic_model,
            temperature=temperature,
            max_tokens=max_tokens,
        )
    else:
        raise ValueError(f"Unknown LLM provider: {provider}")


async def _call_openai_compatible(
    prompt: str,
    system_prompt: str | None,
    model: str,
    temperature: float,
    max_tokens: int,
    base_url: str | None,
    api_key: str,
) -> str:
    """Call OpenAI or any server speaking its chat completions API."""
    from openai import AsyncOpenAI

    client = AsyncOpenAI(api_key=api_key, base_url=base_url)

    messages = []
    if system_prompt:
        messages.append({"role": "system", "content": system_prompt})
    messages.append({"role": "user", "content": prompt})

    response = await client.chat.completions.create(
        model=model,
        messages=messages,
        temperature=temperature,
        max_tokens=max_tokens,
    )

    content = response.choices[0].message.content or ""
    logger.debug(f"{model} returned {len(content)} chars")
    return content


async def _call_anthropic(
    prompt: str,
    system_prompt: str | None,
    model: str,
    temperature: float,
    max_tokens: int,
) -> str:
    """Call Anthropic API."""
    from anthropic import AsyncAnthropic

    client = AsyncAnthropic(api_key=settings.anthropic_api_key)

    # Anthropic uses system as a separate parameter
    kwargs: dict[str, Any] = {
        "model": model,
        "max_tokens": max_tokens,
        "temperature": temperature,
        "messages": [{"role": "user", "content": prompt}],
    }

    if system_prompt:
        kwargs["system"] = system_prompt

    response = await client.messages.create(**kwargs)

    content = response.content[0].text if response.content else ""
    logger.debug(f"{model} returned {len(content)} chars")
    return content
