"""Host asset storage client."""
import re
from typing import Optional, Tuple

from httpx import AsyncClient, HTTPError

from core.logger import LoggerService
from core.settings import Settings
from .errors import ConfigurationError, OperationError

FILENAME_PATTERN = re.compile(r'filename\*?=(?:UTF-8\'\')?"?([^";]+)"?', re.I)


class AssetStorageClient:
    """Reads previously uploaded binaries from the host's asset endpoint."""

    def __init__(
        self,
        settings: Settings,
        logger: LoggerService,
        client: Optional[AsyncClient] = None,
    ) -> None:
        """Initialize asset storage client.

        Args:
            settings: Settings instance
            logger: Logger service instance
            client: Optional preconfigured HTTP client
        """
        self.settings = settings
        self.logger = logger.get_logger(__name__)
        self._client = client

    def _get_request_headers(self) -> dict:
        headers = {}
        if self.settings.ASSET_STORAGE_TOKEN:
            headers["Authorization"] = f"Bearer {self.settings.ASSET_STORAGE_TOKEN}"
        return headers

    @staticmethod
    def _filename(content_disposition: Optional[str], file_id: str) -> str:
        if content_disposition:
            match = FILENAME_PATTERN.search(content_disposition)
            if match:
                return match.group(1)
        return file_id

    async def fetch(self, file_id: str) -> Tuple[str, bytes]:
        """Download an asset.

        Args:
            file_id: Host file identifier

        Returns:
            Tuple of (file name, content)

        Raises:
            ConfigurationError: If the storage URL is not configured
            OperationError: If the download fails
        """
        if not self.settings.ASSET_STORAGE_URL:
            raise ConfigurationError(
                "Asset storage URL is required for audio operations",
                field="ASSET_STORAGE_URL",
            )

        url = f"{self.settings.ASSET_STORAGE_URL.rstrip('/')}/assets/{file_id}"
        self.logger.info("Fetching asset", extra={"file_id": file_id})

        client = self._client or AsyncClient(
            timeout=float(self.settings.ASSET_STORAGE_TIMEOUT)
        )
        try:
            response = await client.get(url, headers=self._get_request_headers())
            response.raise_for_status()
        except HTTPError as e:
            self.logger.error(
                "Failed to fetch asset",
                extra={"file_id": file_id, "error": str(e)},
            )
            raise OperationError(
                f"Failed to fetch file {file_id}: {str(e)}",
                details={"file_id": file_id},
            ) from e
        finally:
            if self._client is None:
                await client.aclose()

        filename = self._filename(response.headers.get("content-disposition"), file_id)
        return filename, response.content
