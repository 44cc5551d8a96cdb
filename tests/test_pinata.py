from unittest.mock import AsyncMock, MagicMock, patch

import aiohttp
import pytest

from burstagent_app._constants import DEFAULT_METADATA_IPFS_URI
from burstagent_app.datamodel import TokenMetadata
from burstagent_app.pinata_service import PinataService


def mock_session(result=None, post_error=None):
    response = MagicMock()
    response.json = AsyncMock(return_value=result)
    response.__aenter__.return_value = response
    session = MagicMock()
    if post_error is not None:
        session.post.side_effect = post_error
    else:
        session.post.return_value = response
    session.__aenter__.return_value = session
    return session


class TestPinataService:
    @pytest.fixture
    def pinata(self):
        return PinataService("jwt-token", host="https://pinata.test/")

    @pytest.mark.asyncio
    async def test_upload_metadata(self, pinata):
        session = mock_session({"IpfsHash": "bafymeta"})
        metadata = TokenMetadata(name="Grumpy Cat", ticker="GRUMP", logo="ipfs://logo", x="https://x.com/grumpy")

        with patch("burstagent_app.pinata_service.aiohttp.ClientSession", return_value=session):
            uri = await pinata.upload_metadata(metadata)

        assert uri == "ipfs://bafymeta"
        url = session.post.call_args.args[0]
        kwargs = session.post.call_args.kwargs
        assert url == "https://pinata.test/pinning/pinJSONToIPFS"
        assert kwargs["headers"] == {"Authorization": "Bearer jwt-token"}
        content = kwargs["json"]["pinataContent"]
        assert content["ticker"] == "GRUMP"
        assert content["decimals"] == 18
        assert "burstAudio" in content
        assert kwargs["json"]["pinataMetadata"] == {"name": "Grumpy Cat.json"}

    @pytest.mark.asyncio
    async def test_upload_metadata_failure_uses_default(self, pinata):
        session = mock_session(post_error=aiohttp.ClientConnectionError("down"))
        with patch("burstagent_app.pinata_service.aiohttp.ClientSession", return_value=session):
            uri = await pinata.upload_metadata(TokenMetadata(name="Grumpy Cat", ticker="GRUMP"))
        assert uri == DEFAULT_METADATA_IPFS_URI

    @pytest.mark.asyncio
    async def test_upload_image(self, pinata):
        session = mock_session({"IpfsHash": "bafylogo"})
        with patch("burstagent_app.pinata_service.aiohttp.ClientSession", return_value=session):
            uri = await pinata.upload_image(b"\x89PNG", "GRUMP_logo.png")

        assert uri == "ipfs://bafylogo"
        assert session.post.call_args.args[0] == "https://pinata.test/pinning/pinFileToIPFS"
        assert isinstance(session.post.call_args.kwargs["data"], aiohttp.FormData)

    @pytest.mark.asyncio
    async def test_upload_image_unexpected_response(self, pinata):
        session = mock_session({"error": "unauthorized"})
        with patch("burstagent_app.pinata_service.aiohttp.ClientSession", return_value=session):
            assert await pinata.upload_image(b"\x89PNG", "GRUMP_logo.png") is None
