import logging
from typing import Optional, Tuple

from django.conf import settings
from django.db import transaction

from analyzer.exceptions import ContractNotFound, GenerationError, InvalidInput
from analyzer.gateway import CHAT_MAX_TOKENS, ModelGateway
from analyzer.models import Contract

from .models import ChatMessage
from .prompts import CHAT_SYSTEM_PROMPT, build_chat_context, build_conversation
from .safety import sensitive_topic, with_disclaimer

logger = logging.getLogger(__name__)

MAX_CLAUSE_CONTEXT_LENGTH = 50


def validate_message(message) -> str:
    if not isinstance(message, str) or not message:
        raise InvalidInput('Message is required')

    trimmed = message.strip()
    if not trimmed:
        raise InvalidInput('Message cannot be empty')

    limit = settings.CHAT_MAX_MESSAGE_LENGTH
    if len(trimmed) > limit:
        raise InvalidInput(f'Message must be under {limit} characters')
    return trimmed


def validate_clause_context(clause_context) -> Optional[str]:
    if clause_context is None:
        return None
    if not isinstance(clause_context, str):
        raise InvalidInput('clauseContext must be a string')
    clause_context = clause_context.strip()
    if len(clause_context) > MAX_CLAUSE_CONTEXT_LENGTH:
        raise InvalidInput(f'clauseContext must be under {MAX_CLAUSE_CONTEXT_LENGTH} characters')
    return clause_context or None


def recent_history(contract: Contract):
    """The most recent turns, oldest first."""
    limit = settings.CHAT_HISTORY_LIMIT
    latest = list(contract.chat_messages.order_by('-created_at', '-id')[:limit])
    latest.reverse()
    return [{'role': m.role, 'content': m.content} for m in latest]


def send_chat_message(
    contract_id,
    message,
    clause_context=None,
    gateway: Optional[ModelGateway] = None,
) -> Tuple[ChatMessage, ChatMessage]:
    """Answer a question about a contract and record the exchange.

    Nothing is written unless the model replies; the user and assistant turns
    are then stored together.
    """
    text = validate_message(message)
    clause_context = validate_clause_context(clause_context)

    try:
        contract = Contract.objects.get(id=contract_id)
    except Contract.DoesNotExist:
        raise ContractNotFound()

    analysis = getattr(contract, 'analysis', None)
    context = build_chat_context(contract.extracted_text, analysis, clause_context)
    conversation = build_conversation(context, recent_history(contract), text)

    topic = sensitive_topic(text)

    try:
        reply = (gateway or ModelGateway()).generate(
            conversation,
            system=CHAT_SYSTEM_PROMPT,
            max_tokens=CHAT_MAX_TOKENS,
        )
    except GenerationError as e:
        logger.error(f"Chat generation failed for contract {contract_id}", exc_info=True)
        raise GenerationError('Chat service unavailable. Please try again.') from e

    if topic:
        reply = with_disclaimer(reply, topic)

    with transaction.atomic():
        # The contract may have been deleted while the model was answering
        if not Contract.objects.select_for_update().filter(id=contract_id).exists():
            raise ContractNotFound()
        user_message = ChatMessage.objects.create(
            contract_id=contract_id,
            role='user',
            content=text,
            clause_context=clause_context,
        )
        assistant_message = ChatMessage.objects.create(
            contract_id=contract_id,
            role='assistant',
            content=reply,
            clause_context=clause_context,
        )

    return user_message, assistant_message
