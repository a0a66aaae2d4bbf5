"""
Archive Builder - bundles one listing's images into a zip.

Images are fetched concurrently through a relay. An image that cannot be
fetched is logged and left out; building the archive itself never fails.
"""
import asyncio
import io
import re
import zipfile
from pathlib import Path
from typing import Any, Awaitable, Callable, List, Optional, Tuple, Union

import httpx

from propscraper.adapters.base import BROWSER_HEADERS
from propscraper.adapters.relay import wrap_url
from propscraper.config import config
from propscraper.models.listing import ListingArchive, ListingResult
from propscraper.utils.logger import LayerLogger

ARCHIVE_FOLDER = "images"

SaveAction = Callable[[ListingArchive], Union[Any, Awaitable[Any]]]


def image_extension(url: str) -> str:
    ext = "jpg"
    if ".png" in url:
        ext = "png"
    if ".webp" in url:
        ext = "webp"
    return ext


def archive_filename(title: str) -> str:
    """Zip name derived from the first 20 characters of the listing title."""
    prefix = re.sub(r"[^a-z0-9]", "_", (title or "")[:20], flags=re.IGNORECASE)
    return f"{prefix or 'listing'}_images.zip"


def save_to_directory(directory: Union[str, Path]) -> SaveAction:
    """Save action that writes the archive into ``directory``."""
    target_dir = Path(directory)

    def save(archive: ListingArchive) -> Path:
        target_dir.mkdir(parents=True, exist_ok=True)
        path = target_dir / archive.filename
        path.write_bytes(archive.content)
        return path

    return save


class ArchiveBuilder:
    """Fetches listing images and packs them into a ListingArchive."""

    def __init__(
        self,
        relay_template: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.logger = LayerLogger("archive_builder")
        self.relay_template = relay_template or config.IMAGE_RELAY_TEMPLATE
        self.timeout = config.IMAGE_FETCH_TIMEOUT if timeout is None else timeout
        self.transport = transport

    async def build(self, listing: ListingResult) -> Optional[ListingArchive]:
        """Return the archive for ``listing``, or None when it has no images."""
        if not listing.images:
            self.logger.log_decision(
                decision="skip_archive",
                reason="listing has no images",
                url=listing.source_url,
            )
            return None

        self.logger.log_action(
            "build_archive", "started", url=listing.source_url, images_count=len(listing.images)
        )

        async with httpx.AsyncClient(
            timeout=self.timeout,
            follow_redirects=True,
            headers=BROWSER_HEADERS,
            transport=self.transport,
        ) as client:
            fetched = await asyncio.gather(*(
                self._fetch_image(client, position, url)
                for position, url in enumerate(listing.images, start=1)
            ))

        buffer = io.BytesIO()
        names: List[str] = []
        failed: List[str] = []
        with zipfile.ZipFile(buffer, "w", compression=zipfile.ZIP_DEFLATED) as zf:
            for url, entry in zip(listing.images, fetched):
                if entry is None:
                    failed.append(url)
                    continue
                name, data = entry
                zf.writestr(name, data)
                names.append(name)

        archive = ListingArchive(
            filename=archive_filename(listing.title),
            content=buffer.getvalue(),
            image_names=names,
            failed_urls=failed,
        )
        self.logger.log_action(
            "build_archive",
            "completed",
            url=listing.source_url,
            filename=archive.filename,
            images_added=len(names),
            images_failed=len(failed),
        )
        return archive

    async def build_and_save(self, listing: ListingResult, save: SaveAction) -> Optional[Any]:
        """Build the archive and hand it to ``save``; returns whatever ``save`` returns."""
        archive = await self.build(listing)
        if archive is None:
            return None
        saved = save(archive)
        if asyncio.iscoroutine(saved):
            saved = await saved
        return saved

    async def _fetch_image(
        self,
        client: httpx.AsyncClient,
        position: int,
        url: str,
    ) -> Optional[Tuple[str, bytes]]:
        try:
            relay_url = wrap_url(self.relay_template, url)
            response = await client.get(relay_url)
            response.raise_for_status()
        except (httpx.HTTPError, httpx.InvalidURL, UnicodeEncodeError) as e:
            self.logger.log_error(
                f"Failed to download image: {str(e)}",
                error_type="image_fetch",
                url=url,
            )
            return None

        self.logger.log_image_download(url, position, len(response.content))
        name = f"{ARCHIVE_FOLDER}/image_{position}.{image_extension(url)}"
        return name, response.content
