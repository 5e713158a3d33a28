import re

_LIST_MARKER = re.compile(r"^\s*(?:[-•*+](?=\s)\s*|\d{1,3}[.)](?=\s)\s*|(?i:step)\s*\d{1,3}\s*[:.)\-]?\s*)")


def normalize_model_id(model_string: str) -> str:
    """
    Sanitizes a model string to be SDK-compatible.

    Examples:
    - 'model="gemini-2.5-flash"' -> 'gemini-2.5-flash'
    - '"gemini-2.5-flash"' -> 'gemini-2.5-flash'
    """
    if not model_string:
        return model_string

    s = model_string.strip()
    if s.lower().startswith("model="):
        s = s[6:]
    return s.strip("\"' ").strip()


def clean_md(text: str) -> str:
    """
    Sanitize markdown artifacts from text.
    Removes:
    - Leading headers (#, ##)
    - Bold markers (**, __)
    - Leading bullets (-, *)
    """
    if not text:
        return ""

    # **text** -> text
    text = re.sub(r"(\*\*|__)(.*?)\1", r"\2", text)
    # # Title -> Title
    text = re.sub(r"^\s*#+\s+", "", text)
    # - Item -> Item
    text = re.sub(r"^\s*[-*•]\s+", "", text)

    return text.strip()


def strip_list_marker(line: str) -> str:
    """Drop a leading bullet, "1." / "2)" number or "Step 3:" label."""
    return _LIST_MARKER.sub("", line, count=1).strip()


def preview(text: str, length: int = 200) -> str:
    """Single-line excerpt for log messages."""
    if not text:
        return ""
    flat = " ".join(text.split())
    if len(flat) <= length:
        return flat
    return flat[:length - 3].rstrip() + "..."
