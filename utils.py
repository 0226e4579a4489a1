import logging
import re

from config import LOG_FORMAT, LOG_LEVEL

# --- LOGGING ---
def configure_logging(level=None):
    """Install the app's log format on the root logger (no-op if already configured)."""
    logging.basicConfig(level=level or LOG_LEVEL, format=LOG_FORMAT)

# --- TEXT HELPERS ---
def normalize_description(value):
    """Flatten an upstream description into plain text.

    The catalog list omits descriptions, while the detail endpoint sends a
    list of paragraphs. Paragraphs are joined with a blank line.
    """
    if value is None:
        return ""
    if isinstance(value, str):
        return value.strip()
    if isinstance(value, (list, tuple)):
        return "\n\n".join(str(p).strip() for p in value if str(p).strip())
    return str(value)

def strip_markdown(text):
    # upstream descriptions carry bold markers and table pipes
    text = re.sub(r"\*\*\*?([^*]+)\*\*\*?", r"\1", text)
    return re.sub(r"\s*\|\s*", " ", text).strip()

def truncate(text, limit):
    if len(text) <= limit:
        return text
    return text[:limit].rstrip() + "..."

def preview(desc, limit):
    """Single-paragraph preview used on list rows."""
    first = desc.split("\n\n", 1)[0] if desc else ""
    return truncate(strip_markdown(first), limit)
