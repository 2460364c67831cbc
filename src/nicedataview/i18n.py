"""Message translation hook.

Views pass every user-visible message through a translator callable
``(message, parameters) -> str``. The default only substitutes ``{name}``
placeholders; applications plug in their own catalogue lookup.
"""

from __future__ import annotations

import re
from collections.abc import Callable, Mapping
from typing import Any

Translator = Callable[[str, Mapping[str, Any]], str]

_PLACEHOLDER = re.compile(r"\{(\w+)\}")


def format_message(message: str, parameters: Mapping[str, Any]) -> str:
    """Replace ``{name}`` placeholders found in ``parameters``.

    Unknown placeholders are left as they are.

    Example:
        >>> format_message("Page {current_page} of {total_pages}", {"current_page": 2, "total_pages": 5})
        'Page 2 of 5'
    """

    def _sub(match: re.Match[str]) -> str:
        name = match.group(1)
        if name in parameters:
            return str(parameters[name])
        return match.group(0)

    return _PLACEHOLDER.sub(_sub, message)
