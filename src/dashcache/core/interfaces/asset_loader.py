"""Asset loader interface."""

from typing import Protocol


class IAssetLoader(Protocol):
    """Contract for verifying that an asset can be loaded."""

    async def load(self, locator: str) -> None:
        """Verify the asset at ``locator`` loads.

        Args:
            locator: The asset locator, usually a URL.

        Raises:
            Exception: Any exception means the asset is not loadable.
        """
        ...
