from typing import Dict, List, Optional

CHAT_SYSTEM_PROMPT = """You are a helpful legal contract assistant. Your role is to answer questions about contracts and legal terms in an accessible, informative way.

IMPORTANT GUIDELINES:

1. INFORMATION ONLY: You provide general information, NOT legal advice. Always be clear about this distinction.

2. REFERENCE THE CONTRACT: When answering questions, reference specific sections or clauses from the analyzed contract when relevant.

3. BE ACCESSIBLE: Explain legal concepts in plain language that non-lawyers can understand.

4. BE BALANCED: Present information objectively without recommending specific actions.

5. STAY FOCUSED: While you can answer general legal questions, gently redirect very off-topic questions back to the contract.

6. SAFETY REMINDERS: For questions involving:
   - Signing/not signing decisions
   - Specific dollar amounts or damages
   - Litigation or legal action
   - Regulatory compliance
   - Employment decisions
   - Personal liability

   Include a reminder that they should consult a licensed attorney for their specific situation.

7. NEVER:
   - Recommend signing or not signing a contract
   - Guarantee outcomes or make predictions
   - Provide jurisdiction-specific legal interpretations
   - Claim your analysis is complete or definitive

8. ALWAYS:
   - Acknowledge the limitations of automated analysis
   - Encourage professional legal review for important contracts
   - Be helpful and thorough within appropriate boundaries"""

SUGGESTED_QUESTIONS = [
    "What's the biggest risk in this contract?",
    "Can I negotiate the liability clause?",
    "What should I watch out for?",
    "Is this contract fair for both parties?",
]


def build_chat_context(contract_text: str, analysis=None, clause_context: Optional[str] = None) -> str:
    """Build the framing block that rides on the first user turn.

    The contract text is always included so chat works even when no analysis
    exists. ``analysis`` is an ``Analysis`` instance or ``None``.
    """
    context = f"""## Contract Being Analyzed

<contract>
{contract_text}
</contract>

"""

    if analysis is not None:
        context += f"""## Analysis Summary

Overall Risk Level: {analysis.overall_risk_level.upper()}

Summary: {analysis.summary}

## Detected Clauses

"""
        for clause in analysis.clauses.all():
            reasons = "\n".join(f"- {r}" for r in clause.risk_reasons or [])
            context += f"""### {clause.type.capitalize()} Clause
Risk Level: {clause.risk_level.upper()}
Original Text: "{clause.original_text}"
Explanation: {clause.plain_language_explanation}
Risk Reasons:
{reasons}

"""

    if clause_context:
        context += f"""## Current Focus

The user is specifically asking about the {clause_context} clause. Prioritize information about this clause in your response, while still considering the broader contract context if relevant.
"""

    return context


def _framed(context: str, question: str) -> str:
    return f"{context}\n\n---\n\nUser Question: {question}"


def build_conversation(context: str, history: List[Dict[str, str]], new_message: str) -> List[Dict[str, str]]:
    """Assemble the turns sent to the model.

    The context is attached to the first user turn only; the rest of the
    history follows verbatim and the new message goes last.
    """
    # The model expects the conversation to open with a user turn
    turns = list(history)
    while turns and turns[0]['role'] != 'user':
        turns.pop(0)

    if not turns:
        return [{'role': 'user', 'content': _framed(context, new_message)}]

    messages = [{'role': 'user', 'content': _framed(context, turns[0]['content'])}]
    messages.extend({'role': t['role'], 'content': t['content']} for t in turns[1:])
    messages.append({'role': 'user', 'content': new_message})
    return messages
