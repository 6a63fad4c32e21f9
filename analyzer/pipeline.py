import json
import logging
import os
import re
import uuid
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

from django.conf import settings
from django.db import transaction

from .exceptions import (
    AnalysisFormatError,
    GenerationError,
    InvalidInput,
)
from .extraction import (
    extract_text,
    file_size_ok,
    file_type_from_name,
    is_very_long,
    looks_non_english,
)
from .gateway import ANALYSIS_MAX_TOKENS, ModelGateway
from .models import RISK_ORDER, Analysis, Clause, Contract
from .prompts import JSON_ONLY_REMINDER, build_analysis_prompt

logger = logging.getLogger(__name__)

CLAUSE_TYPE_ALIASES = {
    'liability': 'liability',
    'termination': 'termination',
    'confidentiality': 'confidentiality',
    'payment': 'payment',
    'payment-terms': 'payment',
    'payment_terms': 'payment',
}

NON_ENGLISH_WARNING = 'Best results with English documents'
LONG_DOCUMENT_WARNING = 'Large document - analysis may take longer'


@dataclass
class UploadOutcome:
    contract: Contract
    analysis: Analysis
    warnings: List[str] = field(default_factory=list)


def _require_string(item, key, where):
    value = item.get(key)
    if not isinstance(value, str) or not value.strip():
        raise AnalysisFormatError(f"{where}: '{key}' must be a non-empty string")
    return value


def _risk_level(value, where):
    level = value.lower() if isinstance(value, str) else None
    if level not in RISK_ORDER:
        raise AnalysisFormatError(f"{where}: invalid risk level {value!r}")
    return level


def _validate_clause(item, index):
    where = f"clause {index}"
    if not isinstance(item, dict):
        raise AnalysisFormatError(f"{where}: expected an object")

    raw_type = item.get('type')
    clause_type = CLAUSE_TYPE_ALIASES.get(raw_type.lower()) if isinstance(raw_type, str) else None
    if clause_type is None:
        raise AnalysisFormatError(f"{where}: unknown clause type {raw_type!r}")

    reasons = item.get('riskReasons', [])
    if not isinstance(reasons, list) or not all(isinstance(r, str) for r in reasons):
        raise AnalysisFormatError(f"{where}: 'riskReasons' must be a list of strings")

    is_override = item.get('isOverride', False)
    if is_override is None:
        is_override = False
    if not isinstance(is_override, bool):
        raise AnalysisFormatError(f"{where}: 'isOverride' must be a boolean")

    justification = item.get('overrideJustification')
    if justification is not None and not isinstance(justification, str):
        raise AnalysisFormatError(f"{where}: 'overrideJustification' must be a string or null")

    return {
        'type': clause_type,
        'originalText': _require_string(item, 'originalText', where),
        'riskLevel': _risk_level(item.get('riskLevel'), where),
        'plainLanguageExplanation': _require_string(item, 'plainLanguageExplanation', where),
        'riskReasons': reasons,
        'isOverride': is_override,
        'overrideJustification': justification or None,
    }


def parse_analysis(raw: str) -> dict:
    """Parse and validate the model's analysis reply.

    Valid JSON is not enough: every field is checked against the expected
    shape, and the overall level is forced to the highest clause level when
    any clauses were found.
    """
    cleaned = raw.strip()
    cleaned = re.sub(r'^```(?:json)?\s*', '', cleaned)
    cleaned = re.sub(r'\s*```$', '', cleaned)

    try:
        data = json.loads(cleaned)
    except json.JSONDecodeError as e:
        raise AnalysisFormatError(f"invalid JSON: {e}") from e

    if not isinstance(data, dict):
        raise AnalysisFormatError("top-level value must be an object")

    clauses = data.get('clauses', [])
    if not isinstance(clauses, list):
        raise AnalysisFormatError("'clauses' must be a list")
    clauses = [_validate_clause(item, i) for i, item in enumerate(clauses)]

    summary = data.get('summary')
    if not isinstance(summary, str):
        raise AnalysisFormatError("'summary' must be a string")

    overall = _risk_level(data.get('overallRiskLevel'), 'analysis')
    if clauses:
        overall = max((c['riskLevel'] for c in clauses), key=RISK_ORDER.__getitem__)

    return {
        'clauses': clauses,
        'overallRiskLevel': overall,
        'summary': summary,
        'raw': data,
    }


def request_analysis(contract_text: str, gateway: ModelGateway) -> dict:
    """Ask the model for an analysis, retrying once if the reply is unusable."""
    prompt = build_analysis_prompt(contract_text)
    reply = gateway.generate(
        [{'role': 'user', 'content': prompt}],
        max_tokens=ANALYSIS_MAX_TOKENS,
    )
    try:
        return parse_analysis(reply)
    except AnalysisFormatError as e:
        logger.warning(f"Analysis reply rejected, retrying with JSON-only reminder: {e}")

    reply = gateway.generate(
        [{'role': 'user', 'content': prompt + JSON_ONLY_REMINDER}],
        max_tokens=ANALYSIS_MAX_TOKENS,
    )
    try:
        return parse_analysis(reply)
    except AnalysisFormatError as e:
        logger.error(f"Analysis reply rejected after retry: {e}")
        raise GenerationError() from e


def collect_warnings(text: str) -> List[str]:
    warnings = []
    if looks_non_english(text):
        warnings.append(NON_ENGLISH_WARNING)
    if is_very_long(text):
        warnings.append(LONG_DOCUMENT_WARNING)
    return warnings


def validate_upload(uploaded) -> str:
    if uploaded is None:
        raise InvalidInput('No file provided')

    max_mb = settings.MAX_FILE_SIZE_MB
    if not file_size_ok(uploaded.size, max_mb):
        raise InvalidInput(f'File must be under {max_mb}MB')

    file_type = file_type_from_name(uploaded.name)
    if file_type is None:
        raise InvalidInput('Only PDF, DOCX, and TXT files are supported')
    return file_type


def _store_file(data: bytes, original_name: str) -> Path:
    upload_dir = Path(settings.UPLOAD_DIR)
    upload_dir.mkdir(parents=True, exist_ok=True)
    ext = os.path.splitext(original_name)[1].lower()
    path = upload_dir / f"{uuid.uuid4().hex}{ext}"
    path.write_bytes(data)
    return path


def _remove_file(path) -> None:
    try:
        Path(path).unlink()
    except OSError as e:
        logger.warning(f"Could not remove stored file {path}: {e}")


def _rollback(contract: Contract, path: Path) -> None:
    contract_id = contract.id
    _remove_file(path)
    try:
        contract.delete()
    except Exception:
        logger.error(f"Failed to roll back contract {contract_id}", exc_info=True)


def save_analysis(contract: Contract, result: dict) -> Analysis:
    with transaction.atomic():
        analysis = Analysis.objects.create(
            contract=contract,
            overall_risk_level=result['overallRiskLevel'],
            summary=result['summary'],
            raw_response=result['raw'],
        )
        Clause.objects.bulk_create([
            Clause(
                analysis=analysis,
                type=c['type'],
                original_text=c['originalText'],
                risk_level=c['riskLevel'],
                plain_language_explanation=c['plainLanguageExplanation'],
                risk_reasons=c['riskReasons'],
                is_override=c['isOverride'],
                override_justification=c['overrideJustification'],
            )
            for c in result['clauses']
        ])
    return analysis


def upload_contract(uploaded, gateway: Optional[ModelGateway] = None) -> UploadOutcome:
    """Validate, extract, store and analyze an uploaded contract.

    Either the contract ends up stored with its analysis, or nothing is left
    behind: no row and no file.
    """
    file_type = validate_upload(uploaded)

    data = uploaded.read()
    extraction = extract_text(data, file_type)
    text = extraction.text
    logger.info(f"Extracted {len(text)} chars from {uploaded.name} ({file_type})")

    warnings = collect_warnings(text)

    path = _store_file(data, uploaded.name)
    try:
        contract = Contract.objects.create(
            filename=path.name,
            original_name=uploaded.name,
            file_type=file_type,
            file_size=uploaded.size,
            file_path=str(path),
            extracted_text=text,
        )
    except Exception:
        _remove_file(path)
        raise

    try:
        result = request_analysis(text, gateway or ModelGateway())
    except Exception:
        logger.error(f"Analysis failed for contract {contract.id}, rolling back", exc_info=True)
        _rollback(contract, path)
        raise

    try:
        analysis = save_analysis(contract, result)
    except Exception:
        _rollback(contract, path)
        raise

    logger.info(
        f"Analysis complete for contract {contract.id}: "
        f"{len(result['clauses'])} clause(s), overall {analysis.overall_risk_level}"
    )
    return UploadOutcome(contract=contract, analysis=analysis, warnings=warnings)


def delete_contract(contract: Contract) -> None:
    """Remove the stored original, then the row and everything hanging off it."""
    contract_id = contract.id
    _remove_file(contract.file_path)
    contract.delete()
    logger.info(f"Deleted contract {contract_id}")
