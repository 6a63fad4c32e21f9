import json
import logging

from django.http import JsonResponse
from django.views.decorators.http import require_POST

from analyzer.exceptions import ClauseWiseError
from analyzer.serializers import serialize_chat_message
from .services import send_chat_message

logger = logging.getLogger(__name__)


@require_POST
def send_message(request, contract_id):
    try:
        body = json.loads(request.body)
    except (json.JSONDecodeError, UnicodeDecodeError):
        return JsonResponse({'error': 'Invalid request.'}, status=400)
    if not isinstance(body, dict):
        return JsonResponse({'error': 'Invalid request.'}, status=400)

    try:
        user_message, assistant_message = send_chat_message(
            contract_id,
            body.get('message'),
            clause_context=body.get('clauseContext'),
        )
    except ClauseWiseError as e:
        return JsonResponse({'error': e.message}, status=e.status_code)
    except Exception:
        logger.error(f"Chat failed for contract {contract_id}", exc_info=True)
        return JsonResponse({'error': 'Failed to send message. Please try again.'}, status=500)

    return JsonResponse({
        'userMessage': serialize_chat_message(user_message),
        'message': serialize_chat_message(assistant_message),
    })
