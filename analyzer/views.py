import logging

from django.db.models import Count
from django.http import HttpResponse, JsonResponse
from django.shortcuts import render
from django.views.decorators.http import require_GET, require_http_methods

from .exceptions import ClauseWiseError, ContractNotFound
from .models import Contract
from .pipeline import delete_contract, upload_contract
from .prompts import CLAUSE_TYPE_NAMES, DISCLAIMER_TEXT
from .report import build_report_pdf
from .serializers import (
    serialize_analysis,
    serialize_chat_message,
    serialize_contract_detail,
    serialize_contract_list_item,
    serialize_contract_summary,
)

logger = logging.getLogger(__name__)


def _json_error(message, status=400):
    return JsonResponse({"error": message}, status=status)


def _get_contract(contract_id):
    try:
        return Contract.objects.get(id=contract_id)
    except Contract.DoesNotExist:
        raise ContractNotFound()


def _get_analysis(contract):
    return getattr(contract, 'analysis', None)


# Pages
def index(request):
    recent = Contract.objects.select_related('analysis')[:5]
    return render(request, 'analyzer/index.html', {'recent': recent})


def history(request):
    contracts = Contract.objects.select_related('analysis').annotate(clause_count=Count('analysis__clauses'))
    return render(request, 'analyzer/history.html', {'contracts': contracts})


def results(request, contract_id):
    try:
        contract = _get_contract(contract_id)
    except ContractNotFound:
        return render(request, 'analyzer/not_found.html', status=404)
    return render(request, 'analyzer/results.html', {
        'contract': contract,
        'analysis': _get_analysis(contract),
        'clause_type_names': CLAUSE_TYPE_NAMES,
        'disclaimer': DISCLAIMER_TEXT,
    })


# API
@require_http_methods(["GET", "POST"])
def contracts(request):
    if request.method == "POST":
        return _upload(request)

    try:
        items = (
            Contract.objects
            .select_related('analysis')
            .annotate(clause_count=Count('analysis__clauses'))
        )
        return JsonResponse({'contracts': [serialize_contract_list_item(c) for c in items]})
    except Exception:
        logger.error("Failed to fetch contracts", exc_info=True)
        return _json_error('Failed to fetch contracts', 500)


def _upload(request):
    uploaded = request.FILES.get('file')
    try:
        outcome = upload_contract(uploaded)
    except ClauseWiseError as e:
        return _json_error(e.message, e.status_code)
    except Exception:
        logger.error("Upload failed", exc_info=True)
        return _json_error('Upload failed. Please try again.', 500)

    return JsonResponse({
        'contract': serialize_contract_summary(outcome.contract),
        'analysis': serialize_analysis(outcome.analysis),
        'warnings': outcome.warnings,
    })


@require_http_methods(["GET", "DELETE"])
def contract_detail(request, contract_id):
    try:
        contract = _get_contract(contract_id)
        if request.method == "DELETE":
            delete_contract(contract)
            return JsonResponse({'success': True})

        analysis = _get_analysis(contract)
        return JsonResponse({
            'contract': serialize_contract_detail(contract, analysis),
            'chatMessages': [serialize_chat_message(m) for m in contract.chat_messages.all()],
        })
    except ClauseWiseError as e:
        return _json_error(e.message, e.status_code)
    except Exception:
        logger.error(f"Failed to {request.method} contract {contract_id}", exc_info=True)
        action = 'delete' if request.method == "DELETE" else 'fetch'
        return _json_error(f'Failed to {action} contract', 500)


@require_GET
def contract_report(request, contract_id):
    try:
        contract = _get_contract(contract_id)
        pdf = build_report_pdf(contract, _get_analysis(contract))
    except ClauseWiseError as e:
        return _json_error(e.message, e.status_code)
    except Exception:
        logger.error(f"Failed to build report for contract {contract_id}", exc_info=True)
        return _json_error('Failed to export report', 500)

    stem = contract.original_name.rsplit('.', 1)[0].replace('"', '')
    response = HttpResponse(pdf, content_type='application/pdf')
    response['Content-Disposition'] = f'attachment; filename="{stem}-analysis.pdf"'
    return response
