"""
Process Message workflow - answer a chat message and apply its file actions.

Triggered when a user sends a message. The assistant placeholder message
(event.message_id) already exists with status "processing".

Steps:
1. wait-for-db-sync
2. get-conversation
3. get-recent-messages (prompt context)
4. generate-title (only while the conversation has the default title)
5. generate-response
6. execute-text-actions (parse + apply; never fails the run)
7. update-assistant-message

The response text is always written to the message, however many of its
actions failed. Action failures only show up in the logs and the returned
summary.
"""

from typing import Any, Awaitable, Callable

from polaris.actions.applier import ApplyReport, apply_text
from polaris.core.config import settings, get_logger
from polaris.core.exceptions import ConfigurationError, NonRetriableError, WorkflowCancelled
from polaris.core.llm import call_llm
from polaris.core.prompts import (
    CODING_AGENT_SYSTEM_PROMPT,
    FAILURE_MESSAGE,
    FALLBACK_RESPONSE,
    HISTORY_TEMPLATE,
    TITLE_GENERATOR_SYSTEM_PROMPT,
)
from polaris.core.types import Message, MessageEvent, MessageStatus
from polaris.storage.base import DocumentStore
from polaris.storage.conversations import ConversationStore
from polaris.tools.base import _get_conversation_store, _get_file_store
from polaris.workflow.steps import StepRunner, cancellations

logger = get_logger("workflow.process_message")

TextGenerator = Callable[..., Awaitable[str]]


def build_system_prompt(recent_messages: list[Message], current_message_id: str) -> str:
    """
    Append earlier conversation turns to the coding agent prompt.

    The message being answered and messages with blank content are left out.
    """
    context_messages = [
        msg for msg in recent_messages
        if msg.id != current_message_id and msg.content.strip()
    ]

    if not context_messages:
        return CODING_AGENT_SYSTEM_PROMPT

    history = "\n\n".join(
        f"{str(msg.role).upper()}: {msg.content}" for msg in context_messages
    )
    return CODING_AGENT_SYSTEM_PROMPT + HISTORY_TEMPLATE.format(history=history)


async def generate_title(
    conversations: ConversationStore,
    conversation_id: str,
    message: str,
    generate: TextGenerator,
) -> str | None:
    """Ask the model for a short title and save it if it returned one."""
    title = await generate(message, system_prompt=TITLE_GENERATOR_SYSTEM_PROMPT)

    if title and title.strip():
        title = title.strip()
        conversations.update_conversation_title(conversation_id, title)
        logger.info(f"Titled conversation {conversation_id}: {title}")
        return title

    return None


def require_internal_key() -> str:
    internal_key = settings.internal_key
    if not internal_key:
        raise ConfigurationError("POLARIS_INTERNAL_KEY is not configured")
    return internal_key


async def process_message(
    event: MessageEvent | dict[str, Any],
    step: StepRunner | None = None,
    files: DocumentStore | None = None,
    conversations: ConversationStore | None = None,
    generate: TextGenerator | None = None,
) -> dict[str, Any]:
    """
    Run the message workflow.

    Args:
        event: The "message sent" payload
        step: Step runner (a fresh one per call if omitted)
        files: Project file store
        conversations: Conversation store
        generate: Text generator, called as generate(prompt, system_prompt=...)

    Returns:
        {"success", "message_id", "conversation_id", "actions"}

    Raises:
        ConfigurationError: If the internal key is missing
        NonRetriableError: If the conversation does not exist
    """
    if isinstance(event, dict):
        event = MessageEvent(**event)
    step = step or StepRunner(run_id=event.message_id)
    files = files or _get_file_store()
    conversations = conversations or _get_conversation_store()
    generate = generate or call_llm

    require_internal_key()

    await step.sleep("wait-for-db-sync", settings.db_sync_delay_seconds)

    conversation = await step.run(
        "get-conversation",
        conversations.get_conversation,
        event.conversation_id,
    )
    if not conversation:
        raise NonRetriableError("Conversation not found")

    recent_messages = await step.run(
        "get-recent-messages",
        conversations.get_recent_messages,
        event.conversation_id,
        settings.recent_messages_limit,
    )
    system_prompt = build_system_prompt(recent_messages, event.message_id)

    if conversation.title == settings.default_conversation_title:
        await step.run(
            "generate-title",
            generate_title,
            conversations,
            event.conversation_id,
            event.message,
            generate,
        )

    assistant_response = await step.run(
        "generate-response",
        generate,
        event.message,
        system_prompt=system_prompt,
    )

    report: ApplyReport = await step.run(
        "execute-text-actions",
        apply_text,
        files,
        event.project_id,
        assistant_response,
    )

    await step.run(
        "update-assistant-message",
        conversations.update_message_content,
        event.message_id,
        assistant_response or FALLBACK_RESPONSE,
    )

    return {
        "success": True,
        "message_id": event.message_id,
        "conversation_id": event.conversation_id,
        "actions": report.summary(),
    }


async def on_failure(event: MessageEvent, conversations: ConversationStore) -> None:
    """Replace the placeholder with an apology so the chat never hangs."""
    if not settings.internal_key:
        return

    try:
        conversations.update_message_content(event.message_id, FAILURE_MESSAGE)
    except Exception as e:
        logger.error(f"Failed to write failure message for {event.message_id}: {e}")


async def run_process_message(
    event: MessageEvent | dict[str, Any],
    files: DocumentStore | None = None,
    conversations: ConversationStore | None = None,
    generate: TextGenerator | None = None,
    retries: int | None = None,
) -> dict[str, Any]:
    """
    Run the workflow with cancellation and failure handling.

    The run can be cancelled with cancel_message(event.message_id). Any other
    error writes the failure message to the placeholder and is re-raised.
    """
    if isinstance(event, dict):
        event = MessageEvent(**event)
    conversations = conversations or _get_conversation_store()

    step = StepRunner(run_id=event.message_id, retries=retries)
    cancellations.register(event.message_id, step)

    try:
        return await process_message(
            event,
            step=step,
            files=files,
            conversations=conversations,
            generate=generate,
        )
    except WorkflowCancelled:
        logger.info(f"Processing of message {event.message_id} cancelled")
        conversations.set_message_status(event.message_id, MessageStatus.CANCELLED)
        raise
    except Exception as e:
        logger.error(f"Processing of message {event.message_id} failed: {e}")
        await on_failure(event, conversations)
        raise
    finally:
        cancellations.unregister(event.message_id)


def cancel_message(message_id: str) -> bool:
    """Cancel the run processing `message_id`. False if none is running."""
    return cancellations.cancel(message_id)
