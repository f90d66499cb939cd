"""
Message Template Rendering
Fills the send time into every locale of the configured message content
"""
import json
from typing import Dict, Optional
from jinja2 import Environment, TemplateError as JinjaTemplateError

DEFAULT_LOCALE = 'en_US'

# Only {{ }} is active. JSON escapes control characters, so the
# block and comment delimiters can never appear in the source.
env = Environment(
    block_start_string='\x00%',
    block_end_string='%\x00',
    comment_start_string='\x00#',
    comment_end_string='#\x00',
    keep_trailing_newline=True
)


class TemplateError(Exception):
    """Raised when the message content cannot be rendered"""
    pass


def collect_locales(content: Optional[Dict[str, str]]) -> str:
    """Return the locale keys as a comma-joined string"""
    return ','.join(content or {}) or DEFAULT_LOCALE


def render_content(content: Optional[Dict[str, str]], send_at: str) -> str:
    """
    Render the locale map with the send time

    The whole map is serialized to JSON and compiled as a single template,
    so only the ``{{date}}`` placeholders change in the stored string.
    Block and comment markers in the text are kept as they are.

    Args:
        content: Mapping of locale to template string
        send_at: Send time, formatted YYYY-MM-DD HH:MM:SS

    Returns:
        Rendered JSON string
    """
    try:
        source = json.dumps(content or {}, ensure_ascii=False)
    except (TypeError, ValueError) as e:
        raise TemplateError(f"Message content is not serializable: {e}") from e

    try:
        return env.from_string(source).render(date=send_at)
    except JinjaTemplateError as e:
        raise TemplateError(f"Failed to render message content: {e}") from e
