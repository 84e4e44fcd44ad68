"""HTTP download of meal photos."""

from dataclasses import dataclass
from typing import Protocol

import httpx

DEFAULT_MAX_BYTES = 10 * 1024 * 1024


class ImageTooLargeError(ValueError):
    """Raised when a downloaded image exceeds the size limit."""


class ImageDownloader(Protocol):
    """Interface for fetching photo bytes from a URL."""

    async def download(self, url: str) -> bytes:
        """Download an image and return its bytes."""


@dataclass
class HttpxImageDownloader(ImageDownloader):
    """Image downloader using httpx."""

    http_client: httpx.AsyncClient
    max_bytes: int = DEFAULT_MAX_BYTES

    @classmethod
    def create(cls, max_bytes: int = DEFAULT_MAX_BYTES) -> "HttpxImageDownloader":
        """Create a downloader with a managed httpx session."""
        return cls(http_client=httpx.AsyncClient(follow_redirects=True), max_bytes=max_bytes)

    async def download(self, url: str) -> bytes:
        """Download image bytes, refusing anything over max_bytes."""
        async with self.http_client.stream("GET", url, timeout=20) as response:
            response.raise_for_status()
            declared = response.headers.get("content-length", "")
            if declared.isdigit() and int(declared) > self.max_bytes:
                raise ImageTooLargeError(
                    f"Declared image size {declared} exceeds maximum {self.max_bytes}"
                )
            chunks: list[bytes] = []
            received = 0
            async for chunk in response.aiter_bytes():
                received += len(chunk)
                if received > self.max_bytes:
                    raise ImageTooLargeError(
                        f"Image size exceeds maximum {self.max_bytes}"
                    )
                chunks.append(chunk)
        return b"".join(chunks)

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()
