import json
import textwrap
from string import Template
from typing import Any


def _to_prompt_text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, (dict, list, tuple)):
        return json.dumps(value, ensure_ascii=False)
    return str(value)


def render_prompt(template: str, **values: Any) -> str:
    """
    Fill a $-style prompt template. Unknown placeholders are left untouched so that
    literal JSON braces and dollar amounts in the template survive rendering.
    """
    text = textwrap.dedent(template).strip("\n")
    rendered = Template(text).safe_substitute({k: _to_prompt_text(v) for k, v in values.items()})
    return rendered.strip() + "\n"
