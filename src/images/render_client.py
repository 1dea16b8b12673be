# src/images/render_client.py - v1
"""Rendering collaborator: rasterize an HTML snippet into PNG bytes.

The default implementation calls the Cloudflare Browser Rendering
screenshot endpoint. Non-success responses, timeouts and transport errors
raise RenderServiceError; nothing is retried.
"""

from __future__ import annotations

import html
import logging
from abc import ABC, abstractmethod
from typing import Any

import httpx

from threadbook.config.settings import RenderingCredentials
from threadbook.core.errors import RenderServiceError

logger = logging.getLogger(__name__)

_SCREENSHOT_URL = (
    "https://api.cloudflare.com/client/v4/accounts/{account_id}/browser-rendering/screenshot"
)

# html and body have default padding that would offset the image.
_RENDER_STYLE = (
    "<style>* { margin: 0; padding: 0; } "
    "body { margin: 0; padding: 0; overflow: hidden; } "
    "img { display: block; width: 100%; height: auto; }</style>"
)


def build_render_html(image_url: str) -> str:
    """Minimal page holding a single margin-free image."""
    return f'{_RENDER_STYLE}<img src="{html.escape(image_url, quote=True)}">'


class BaseRenderClient(ABC):
    """Interface for services that turn HTML into image bytes."""

    @abstractmethod
    async def render_to_image(self, html: str) -> bytes:
        """Rasterize html and return the image bytes."""


class CloudflareRenderClient(BaseRenderClient):
    """Cloudflare Browser Rendering screenshot client."""

    def __init__(
        self,
        credentials: RenderingCredentials,
        client: httpx.AsyncClient,
        timeout_s: float = 60.0,
        viewport_width: int = 640,
    ) -> None:
        self._credentials = credentials
        self._client = client
        self._timeout_s = timeout_s
        self._viewport_width = viewport_width

    def _payload(self, html: str) -> dict[str, Any]:
        return {
            "html": html,
            "screenshotOptions": {"omitBackground": False, "fullPage": True},
            # A 1px-high viewport with fullPage captures exactly the image height.
            "viewport": {"width": self._viewport_width, "height": 1},
        }

    async def render_to_image(self, html: str) -> bytes:
        url = _SCREENSHOT_URL.format(account_id=self._credentials.account_id)
        headers = {"Authorization": f"Bearer {self._credentials.api_key}"}
        try:
            response = await self._client.post(
                url, headers=headers, json=self._payload(html), timeout=self._timeout_s,
            )
        except httpx.TimeoutException as e:
            raise RenderServiceError(
                None, f"request timed out after {self._timeout_s:.0f}s"
            ) from e
        except httpx.HTTPError as e:
            raise RenderServiceError(None, f"request failed: {e}") from e

        if not response.is_success:
            raise RenderServiceError(response.status_code, response.text)

        logger.debug("Rendered image (%d bytes)", len(response.content))
        return response.content
