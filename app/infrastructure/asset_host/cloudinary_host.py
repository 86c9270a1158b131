import logging
from typing import Any, Dict, Optional

import cloudinary
import cloudinary.uploader
import cloudinary.utils
from cloudinary.exceptions import Error as CloudinaryError

from ...config import Settings, settings
from ...application.ports.asset_host import AssetHost, UploadedAsset
from ...exceptions import HostRejected, HostUnavailable

logger = logging.getLogger(__name__)


def configure_cloudinary(config: Settings = settings) -> None:
    """Apply credentials from settings; otherwise the SDK reads CLOUDINARY_URL."""
    if config.cloudinary_configured:
        cloudinary.config(
            cloud_name=config.CLOUDINARY_CLOUD_NAME,
            api_key=config.CLOUDINARY_API_KEY,
            api_secret=config.CLOUDINARY_API_SECRET,
            secure=True,
        )
    else:
        logger.warning("Cloudinary credentials not set in settings, relying on CLOUDINARY_URL")


def _raise_for_error(result: Dict[str, Any]) -> None:
    error = result.get("error")
    if not error:
        return
    message = error.get("message", "unknown error")
    http_code = error.get("http_code")
    if http_code is not None and 400 <= int(http_code) < 500:
        raise HostRejected(message)
    raise HostUnavailable(message)


class CloudinaryAssetHost(AssetHost):
    def __init__(self, folder: Optional[str] = None):
        self.folder = folder if folder is not None else settings.CLOUDINARY_FOLDER

    def upload(self, image: str) -> UploadedAsset:
        options: Dict[str, Any] = {"resource_type": "image", "return_error": True}
        if self.folder:
            options["folder"] = self.folder
        # The SDK opens any string that is not a well-formed data URI as a local file
        if not cloudinary.utils.is_remote_url(image):
            raise HostRejected("malformed base64 image payload")
        try:
            result = cloudinary.uploader.upload(image, **options)
        except (CloudinaryError, ValueError) as e:
            logger.error(f"Cloudinary upload failed: {str(e)}")
            raise HostUnavailable(str(e))
        _raise_for_error(result)

        url = result.get("secure_url")
        asset_id = result.get("public_id")
        if not url or not asset_id:
            raise HostRejected("upload response missing secure_url or public_id")
        return UploadedAsset(url=url, asset_id=asset_id)

    def delete(self, asset_id: str) -> bool:
        try:
            result = cloudinary.uploader.destroy(asset_id, invalidate=True, return_error=True)
        except (CloudinaryError, ValueError) as e:
            logger.error(f"Cloudinary destroy failed for {asset_id}: {str(e)}")
            raise HostUnavailable(str(e))
        _raise_for_error(result)

        outcome = result.get("result")
        if outcome == "ok":
            return True
        if outcome == "not found":
            return False
        raise HostRejected(f"unexpected destroy result: {outcome}")
