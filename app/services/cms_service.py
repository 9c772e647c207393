"""
Sanity CMS client: read-only GROQ queries over HTTP.

Query URL shape:
    https://<project>.apicdn.sanity.io/v<api_version>/data/query/<dataset>
        ?query=<groq>&$code="SAVE10"

Parameters are always bound as $name and sent JSON-encoded, never pasted
into the GROQ string, so a user-entered coupon code cannot change the query.
"""
import json
import logging
import re
from functools import lru_cache
from typing import Any, Optional

import requests

from app.config import settings

logger = logging.getLogger(__name__)

IMAGE_CDN = "https://cdn.sanity.io/images"
# image-<assetId>-<width>x<height>-<format>
_IMAGE_REF = re.compile(r"^image-(?P<id>[A-Za-z0-9]+)-(?P<dims>\d+x\d+)-(?P<fmt>[a-z0-9]+)$")


class CMSError(Exception):
    """The CMS could not be reached or returned something we cannot read."""


class SanityClient:
    def __init__(
        self,
        project_id: str,
        dataset: str,
        api_version: str,
        token: Optional[str] = None,
        use_cdn: bool = True,
        timeout: float = 10.0,
        session: Optional[requests.Session] = None,
    ):
        self.project_id = project_id
        self.dataset = dataset
        self.api_version = api_version.lstrip("v")
        self.token = token
        self.use_cdn = use_cdn
        self.timeout = timeout
        self.session = session or requests.Session()

    @property
    def query_url(self) -> str:
        host = "apicdn" if self.use_cdn else "api"
        return (
            f"https://{self.project_id}.{host}.sanity.io"
            f"/v{self.api_version}/data/query/{self.dataset}"
        )

    def fetch(self, query: str, params: Optional[dict] = None) -> Any:
        """Run a GROQ query and return its `result` member."""
        query_params = {"query": query}
        for name, value in (params or {}).items():
            query_params[f"${name}"] = json.dumps(value)

        headers = {}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"

        try:
            response = self.session.get(
                self.query_url,
                params=query_params,
                headers=headers,
                timeout=self.timeout,
            )
            response.raise_for_status()
            body = response.json()
        except requests.RequestException as exc:
            logger.error(f"CMS request failed: {exc}")
            raise CMSError(str(exc)) from exc
        except ValueError as exc:
            logger.error("CMS returned a non-JSON body")
            raise CMSError("invalid JSON from CMS") from exc

        if not isinstance(body, dict) or "result" not in body:
            raise CMSError("CMS response has no result")
        return body["result"]

    def image_url(self, source: Any) -> Optional[str]:
        """
        Build a CDN URL for an image field.

        Accepts an asset reference string, an image field ({"asset": {"_ref": ...}}),
        or an image field whose asset was expanded with `asset->` (has "url").
        """
        if not source:
            return None
        if isinstance(source, dict):
            asset = source.get("asset", source)
            if isinstance(asset, dict):
                if asset.get("url"):
                    return asset["url"]
                source = asset.get("_ref") or asset.get("_id")
            else:
                source = asset
        if not isinstance(source, str):
            return None
        match = _IMAGE_REF.match(source)
        if not match:
            return None
        return (
            f"{IMAGE_CDN}/{self.project_id}/{self.dataset}/"
            f"{match['id']}-{match['dims']}.{match['fmt']}"
        )


@lru_cache()
def get_cms_client() -> SanityClient:
    """
    Shared client, built once from settings.
    Used as a FastAPI dependency so tests can swap in a fake.
    """
    return SanityClient(
        project_id=settings.sanity_project_id,
        dataset=settings.sanity_dataset,
        api_version=settings.sanity_api_version,
        token=settings.sanity_api_token,
        use_cdn=settings.sanity_use_cdn,
        timeout=settings.sanity_timeout_seconds,
    )
