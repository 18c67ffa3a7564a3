"""Free-text sanitization for imported statement content."""

import re

MAX_TEXT_LENGTH = 1000

_SCRIPT_BLOCK_RE = re.compile(
    r"<script\b[^<]*(?:(?!</script>)<[^<]*)*</script>", re.IGNORECASE
)
_PAYLOAD_RE = re.compile(r"javascript:|vbscript:|data:|onload|onerror", re.IGNORECASE)


def sanitize_text(text: str, max_length: int = MAX_TEXT_LENGTH) -> str:
    """Strip script-injection payloads from user supplied text.

    Removes ``<script>`` blocks, script URL schemes and inline event handler
    names, trims whitespace and truncates to ``max_length`` characters.
    """
    if not text:
        return ""

    sanitized = text.strip()
    sanitized = _SCRIPT_BLOCK_RE.sub("", sanitized)
    sanitized = _PAYLOAD_RE.sub("", sanitized)
    return sanitized[:max_length].strip()
