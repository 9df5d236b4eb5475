import logging
from typing import Any, List

from pydantic import ValidationError

from .errors import UnexpectedChoiceCountError, UpstreamTransportError
from .providers.openai_compat import OpenAICompatClient, openai_completion_request
from .schemas import Access, ChatMessage, ChatResult, ModelDescription, ModelSelector

logger = logging.getLogger(__name__)

# only chat models are surfaced
MODEL_FAMILY_MARKER = "gpt"


def _model_sort_key(model: ModelDescription):
    return len(model.id.split("-"))


def sort_models(models: List[ModelDescription]) -> List[ModelDescription]:
    """
    Fewer '-' separated segments first, ties by id descending.
    """
    # code point comparison, not locale aware
    ordered = sorted(models, key=lambda m: m.id, reverse=True)
    return sorted(ordered, key=_model_sort_key)


def _is_chat_model(entry: Any) -> bool:
    return isinstance(entry, dict) and isinstance(entry.get("id"), str) and MODEL_FAMILY_MARKER in entry["id"]


async def list_models(upstream: OpenAICompatClient, access: Access) -> List[ModelDescription]:
    wire = await upstream.get(access, "/v1/models")
    data = wire.get("data") if isinstance(wire, dict) else None

    llms = [ModelDescription.model_validate(m) for m in data or [] if _is_chat_model(m)]
    return sort_models(llms)


def _single_choice(response: Any) -> ChatResult:
    choices = response.get("choices") if isinstance(response, dict) else None
    count = len(choices) if isinstance(choices, list) else None
    if count != 1:
        raise UnexpectedChoiceCountError(count)

    single = choices[0]
    try:
        message = single.get("message") or {}
        return ChatResult(
            role=message.get("role"),
            content=message.get("content"),
            finish_reason=single.get("finish_reason"),
        )
    except (AttributeError, ValidationError) as e:
        raise UpstreamTransportError(f"Invalid completion from upstream: {e}") from e


async def chat_generate(
    upstream: OpenAICompatClient,
    access: Access,
    model: ModelSelector,
    history: List[ChatMessage],
) -> ChatResult:
    body = openai_completion_request(model, history, stream=False)

    try:
        response = await upstream.post(access, body, "/v1/chat/completions")
    except Exception as e:
        # 429s are expected, do not log them
        if not (isinstance(e, UpstreamTransportError) and e.is_rate_limit):
            logger.error("api/openai/chat error: %s", e)
        raise

    try:
        return _single_choice(response)
    except UpstreamTransportError as e:
        logger.error("api/openai/chat error: %s", e)
        raise
