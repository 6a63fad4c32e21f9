"""Shape model instances into the camelCase JSON the client consumes."""


def _iso(dt):
    return dt.isoformat() if dt else None


def serialize_clause(clause):
    return {
        'id': clause.id,
        'type': clause.type,
        'originalText': clause.original_text,
        'riskLevel': clause.risk_level,
        'plainLanguageExplanation': clause.plain_language_explanation,
        'riskReasons': list(clause.risk_reasons or []),
        'isOverride': clause.is_override,
        'overrideJustification': clause.override_justification,
    }


def serialize_analysis(analysis, include_id=False):
    data = {
        'overallRiskLevel': analysis.overall_risk_level,
        'summary': analysis.summary,
        'clauses': [serialize_clause(c) for c in analysis.clauses.all()],
    }
    if include_id:
        data = {'id': analysis.id, **data}
    return data


def serialize_contract_summary(contract):
    return {
        'id': str(contract.id),
        'filename': contract.filename,
        'originalName': contract.original_name,
        'createdAt': _iso(contract.created_at),
    }


def serialize_contract_list_item(contract):
    analysis = getattr(contract, 'analysis', None)
    return {
        'id': str(contract.id),
        'originalName': contract.original_name,
        'createdAt': _iso(contract.created_at),
        'analysis': {
            'overallRiskLevel': analysis.overall_risk_level,
            'clauseCount': contract.clause_count,
        } if analysis else None,
    }


def serialize_contract_detail(contract, analysis):
    return {
        'id': str(contract.id),
        'originalName': contract.original_name,
        'fileType': contract.file_type,
        'fileSize': contract.file_size,
        'extractedText': contract.extracted_text,
        'createdAt': _iso(contract.created_at),
        'analysis': serialize_analysis(analysis, include_id=True) if analysis else None,
    }


def serialize_chat_message(message):
    return {
        'id': message.id,
        'role': message.role,
        'content': message.content,
        'clauseContext': message.clause_context,
        'createdAt': _iso(message.created_at),
    }
