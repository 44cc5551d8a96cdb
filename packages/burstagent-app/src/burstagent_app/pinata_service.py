import json
import logging
import traceback
from typing import Any, Dict, Optional

import aiohttp

from ._constants import DEFAULT_METADATA_IPFS_URI, LOGGER_NAME
from .datamodel import TokenMetadata
from .metrics import pinning_failure_count

logger = logging.getLogger(LOGGER_NAME)


class PinataService:
    """Pins token images and metadata documents on IPFS through the Pinata API."""

    DEFAULT_HOST = "https://api.pinata.cloud"

    def __init__(self, jwt: str, host: str = DEFAULT_HOST, timeout: float = 60) -> None:
        self._jwt = jwt
        self._host = host.rstrip("/")
        self._timeout = aiohttp.ClientTimeout(total=timeout)

    async def upload_image(self, image: bytes, file_name: str) -> Optional[str]:
        """
        pin an image.
        inputs:
            - image: bytes, PNG encoded image
            - file_name: string, name of the pinned file
        outputs:
            - string, ipfs uri of the image, or None when the upload failed
        """
        form = aiohttp.FormData()
        form.add_field("file", image, filename=file_name, content_type="image/png")
        form.add_field("pinataMetadata", json.dumps({"name": file_name}), content_type="application/json")
        form.add_field("pinataOptions", json.dumps({"cidVersion": 1}), content_type="application/json")
        ipfs_hash = await self._request("/pinning/pinFileToIPFS", data=form)
        if ipfs_hash is None:
            logger.error(f"Failed to upload image {file_name} to IPFS")
            return None
        return f"ipfs://{ipfs_hash}"

    async def upload_metadata(self, metadata: TokenMetadata) -> str:
        """
        pin the token metadata document.
        inputs:
            - metadata: TokenMetadata
        outputs:
            - string, ipfs uri of the document; a fixed default document when the upload failed
        """
        payload: Dict[str, Any] = {
            "pinataContent": metadata.model_dump(by_alias=True),
            "pinataMetadata": {"name": f"{metadata.name}.json"},
            "pinataOptions": {"cidVersion": 1},
        }
        ipfs_hash = await self._request("/pinning/pinJSONToIPFS", json=payload)
        if ipfs_hash is None:
            logger.error(f"Failed to upload metadata for {metadata.name} to IPFS, using default metadata")
            return DEFAULT_METADATA_IPFS_URI
        return f"ipfs://{ipfs_hash}"

    async def _request(self, uri: str, **kwargs: Any) -> Optional[str]:
        url = f"{self._host}{uri}"
        headers = {"Authorization": f"Bearer {self._jwt}"}
        try:
            async with aiohttp.ClientSession(timeout=self._timeout) as session:
                async with session.post(url, headers=headers, **kwargs) as response:
                    response.raise_for_status()
                    result = await response.json()
                    logger.info(f"POST {url} response:{result}")
                    return result["IpfsHash"]
        except aiohttp.ClientError as e:
            pinning_failure_count.inc()
            logger.error(f"Error POST {url}: {e}")
            return None
        except Exception as e:
            pinning_failure_count.inc()
            logger.error(traceback.format_exc())
            logger.error(f"Unexpected error POST {url}: {e}")
            return None
