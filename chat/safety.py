import re
from typing import Optional

SENSITIVE_PATTERNS = [
    re.compile(r'should i sign', re.I),
    re.compile(r'sign this', re.I),
    re.compile(r'not sign', re.I),
    re.compile(r'sue|lawsuit|litigation|court', re.I),
    re.compile(r'how much.*damages', re.I),
    re.compile(r'\$\d+'),
    re.compile(r'liable for', re.I),
    re.compile(r'comply|compliance|regulatory', re.I),
    re.compile(r'fire|terminate.*employee', re.I),
    re.compile(r'personal.*liability', re.I),
    re.compile(r'criminal', re.I),
    re.compile(r'penalty|penalties', re.I),
]

# Order matters: the first category whose pattern matches is reported.
TOPIC_CATEGORIES = [
    (re.compile(r'sign|signing', re.I), 'contract execution decisions'),
    (re.compile(r'sue|lawsuit|litigation|court', re.I), 'legal action'),
    (re.compile(r'damages|\$\d+|liability', re.I), 'financial liability'),
    (re.compile(r'comply|compliance|regulatory', re.I), 'regulatory compliance'),
    (re.compile(r'fire|terminate.*employee|employment', re.I), 'employment decisions'),
]
FALLBACK_TOPIC = 'this legal matter'


def is_sensitive(message: str) -> bool:
    return any(p.search(message) for p in SENSITIVE_PATTERNS)


def classify_topic(message: str) -> str:
    for pattern, label in TOPIC_CATEGORIES:
        if pattern.search(message):
            return label
    return FALLBACK_TOPIC


def sensitive_topic(message: str) -> Optional[str]:
    """Return the topic label for a sensitive message, or None."""
    if not is_sensitive(message):
        return None
    return classify_topic(message)


def enhanced_disclaimer(topic: str) -> str:
    return (
        "I can provide general information, but this should not be considered legal advice. "
        f"For decisions about {topic}, please consult with a licensed attorney "
        "who can review your specific situation."
    )


def with_disclaimer(reply: str, topic: str) -> str:
    return f"{reply}\n\n---\n\n*{enhanced_disclaimer(topic)}*"
