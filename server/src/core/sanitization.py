import re

CONTROL_CHARS_PATTERN = re.compile(r'[\x00-\x08\x0b\x0c\x0e-\x1f\x7f]')


def sanitize_text(text: str | None) -> str:
    """Strip control characters (newlines and tabs are kept) and surrounding whitespace."""
    if not text:
        return ""
    return CONTROL_CHARS_PATTERN.sub('', text).strip()


def sanitize_username(name: str) -> str:
    """Usernames are single-line: drop every control character including newlines."""
    if not name:
        return ""
    name = CONTROL_CHARS_PATTERN.sub('', name)
    return re.sub(r'[\n\r\t]', '', name).strip()
