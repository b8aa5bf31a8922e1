"""Image URL derivation via the Pollinations prompt endpoint."""

from __future__ import annotations

from urllib.parse import quote

from ..constants import POLLINATIONS_PROMPT_URL

# Characters JavaScript's encodeURIComponent leaves unescaped.
_URI_COMPONENT_SAFE = "-_.!~*'()"


class PollinationsImageProvider:
    """Builds image URLs locally; the image is rendered by the remote service on fetch."""

    def __init__(self, base_url: str = POLLINATIONS_PROMPT_URL):
        self.base_url = base_url if base_url.endswith("/") else f"{base_url}/"

    def url_for(self, prompt: str) -> str:
        return f"{self.base_url}{quote(prompt, safe=_URI_COMPONENT_SAFE)}"
