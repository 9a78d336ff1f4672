"""
JSON response class used as the app-wide default.
"""

from __future__ import annotations

from typing import Any

from fastapi.responses import JSONResponse

# "<", ">" and "&" only ever appear inside JSON string literals, so the
# byte-level replacement keeps the document valid.
_HTML_ESCAPES = (
    (b"<", b"\\u003c"),
    (b">", b"\\u003e"),
    (b"&", b"\\u0026"),
)


class EscapedJSONResponse(JSONResponse):
    """
    JSON response that is safe to inline into an HTML page.
    """

    def render(self, content: Any) -> bytes:
        body = super().render(content)
        for raw, escaped in _HTML_ESCAPES:
            body = body.replace(raw, escaped)
        return body
