# storefront/services/media_client.py
import base64
import hashlib
import time

import requests

from storefront.utils.retry import http_retry
from storefront.utils.settings import (
    CLOUDINARY_URL,
    CLOUDINARY_CLOUD_NAME,
    CLOUDINARY_API_KEY,
    CLOUDINARY_API_SECRET,
)
from storefront.utils.logging import get_logger

logger = get_logger(__name__)

IMAGE_TYPES = ("image/jpeg", "image/png", "image/webp")
VIDEO_TYPES = ("video/mp4", "video/webm", "video/quicktime", "video/x-msvideo")
IMAGE_MAX_SIZE = 5 * 1024 * 1024
VIDEO_MAX_SIZE = 50 * 1024 * 1024


def to_data_uri(content_type: str, data: bytes) -> str:
    return f"data:{content_type};base64,{base64.b64encode(data).decode('ascii')}"


def sign_params(params: dict, api_secret: str) -> str:
    # podpis cloudinary: sha1("a=1&b=2" + secret), parametry posortowane
    to_sign = "&".join(f"{k}={params[k]}" for k in sorted(params))
    return hashlib.sha1((to_sign + api_secret).encode("utf-8")).hexdigest()


class MediaClient:
    """
    Upload zdjec/filmow do Cloudinary (HTTP API).
    Bez skonfigurowanych kluczy zwraca data URI z base64.
    """

    def __init__(
        self,
        cloud_name: str | None = None,
        api_key: str | None = None,
        api_secret: str | None = None,
        base_url: str | None = None,
        timeout: int = 30,
    ):
        self.cloud_name = cloud_name if cloud_name is not None else CLOUDINARY_CLOUD_NAME
        self.api_key = api_key if api_key is not None else CLOUDINARY_API_KEY
        self.api_secret = api_secret if api_secret is not None else CLOUDINARY_API_SECRET
        self.base_url = (base_url or CLOUDINARY_URL).rstrip("/")
        self.timeout = timeout

    @property
    def configured(self) -> bool:
        return bool(self.cloud_name and self.api_key and self.api_secret)

    def upload(self, data: bytes, content_type: str, resource_type: str, folder: str) -> dict:
        data_uri = to_data_uri(content_type, data)

        if not self.configured:
            logger.warning("Cloudinary nie skonfigurowane, zwracam data URI")
            return {"url": data_uri, "public_id": None}

        result = self._post(data_uri, resource_type, folder)
        return {"url": result["secure_url"], "public_id": result.get("public_id")}

    @http_retry()
    def _post(self, data_uri: str, resource_type: str, folder: str) -> dict:
        url = f"{self.base_url}/{self.cloud_name}/{resource_type}/upload"
        params = {"folder": folder, "timestamp": int(time.time())}
        body = {
            **params,
            "file": data_uri,
            "api_key": self.api_key,
            "signature": sign_params(params, self.api_secret),
        }
        logger.info(f"MediaClient POST {url}")

        resp = requests.post(url, data=body, timeout=self.timeout)
        resp.raise_for_status()
        return resp.json()
