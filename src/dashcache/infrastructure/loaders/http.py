"""HTTP asset loader implementation."""

import httpx


class HttpAssetLoader:
    """Verifies assets by downloading them.

    An asset is loadable when the GET succeeds, the body is not empty
    and, if ``require_image`` is set, the content type is an image.
    """

    def __init__(
        self,
        client: httpx.AsyncClient | None = None,
        require_image: bool = True,
        timeout: float = 10.0,
    ) -> None:
        """Initialize the loader.

        Args:
            client: Optional preconfigured httpx client.
            require_image: Reject responses whose content type is not ``image/*``.
            timeout: Request timeout when creating a client.
        """
        self._client = client or httpx.AsyncClient(timeout=timeout, follow_redirects=True)
        self._require_image = require_image

    async def load(self, locator: str) -> None:
        """Verify the asset at ``locator`` loads.

        Raises:
            httpx.HTTPError: On transport errors or error statuses.
            ValueError: If the body is empty or not an image.
        """
        response = await self._client.get(locator)
        response.raise_for_status()

        if not response.content:
            raise ValueError("empty response body")
        if self._require_image:
            content_type = response.headers.get("content-type", "")
            if not content_type.startswith("image/"):
                raise ValueError(f"not an image: {content_type or 'no content type'}")

    async def aclose(self) -> None:
        """Close the underlying httpx client."""
        await self._client.aclose()
