from __future__ import annotations

import asyncio
import base64
import logging
import mimetypes
from dataclasses import dataclass, field
from pathlib import Path

import httpx

from .config import Settings, get_settings
from .errors import AssetUnavailable
from .types import Theme

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RenderAssets:
    fonts: dict[str, bytes] = field(default_factory=dict)
    header_bar: str | None = None
    section_bar: str | None = None


@dataclass
class AssetConfig:
    base_url: str | None
    assets_dir: Path
    timeout_seconds: float


class AssetProvider:
    """Fetches font and image payloads; failures come back as None."""

    def __init__(self, cfg: AssetConfig, *, transport: httpx.AsyncBaseTransport | None = None):
        self.cfg = cfg
        self._transport = transport

    @classmethod
    def from_settings(cls, settings: Settings | None = None) -> AssetProvider:
        settings = settings or get_settings()
        return cls(
            AssetConfig(
                base_url=settings.assets_base_url,
                assets_dir=settings.assets_dir,
                timeout_seconds=settings.asset_timeout_seconds,
            )
        )

    @property
    def remote(self) -> bool:
        return bool(self.cfg.base_url)

    def _url(self, path: str) -> str:
        if path.startswith(('http://', 'https://')):
            return path
        assert self.cfg.base_url is not None
        return f"{self.cfg.base_url.rstrip('/')}/{path.lstrip('/')}"

    def _local_path(self, path: str) -> Path:
        candidate = Path(path)
        if candidate.is_absolute() and candidate.exists():
            return candidate
        return self.cfg.assets_dir / path.lstrip('/')

    async def _read_remote(self, path: str) -> bytes:
        url = self._url(path)
        try:
            async with httpx.AsyncClient(
                timeout=max(1.0, float(self.cfg.timeout_seconds)),
                transport=self._transport,
            ) as client:
                response = await client.get(url)
            response.raise_for_status()
        except httpx.HTTPError as exc:
            raise AssetUnavailable(path, str(exc) or type(exc).__name__) from exc
        return response.content

    def _read_local(self, path: str) -> bytes:
        resolved = self._local_path(path)
        if not resolved.is_file():
            raise AssetUnavailable(path, f'no file at {resolved}')
        try:
            return resolved.read_bytes()
        except OSError as exc:
            raise AssetUnavailable(path, str(exc)) from exc

    async def read_bytes(self, path: str) -> bytes:
        if self.remote or path.startswith(('http://', 'https://')):
            payload = await self._read_remote(path)
        else:
            payload = await asyncio.to_thread(self._read_local, path)
        if not payload:
            raise AssetUnavailable(path, 'empty payload')
        return payload

    async def fetch_font(self, path: str) -> bytes | None:
        try:
            return await self.read_bytes(path)
        except AssetUnavailable as exc:
            logger.warning('Failed to load font, falling back to Helvetica: %s', exc)
            return None

    async def fetch_image(self, path: str) -> str | None:
        try:
            payload = await self.read_bytes(path)
        except AssetUnavailable as exc:
            logger.warning('Failed to load image, skipping it: %s', exc)
            return None
        mime = mimetypes.guess_type(path)[0] or 'image/png'
        return f'data:{mime};base64,{base64.b64encode(payload).decode("ascii")}'


async def _none() -> None:
    return None


async def load_render_assets(
    theme: Theme,
    provider: AssetProvider,
    *,
    font_sources: dict[str, str] | None = None,
) -> RenderAssets:
    """Fetch everything the theme needs before composition starts."""
    sources = dict(font_sources or {})
    font_weights = list(sources)
    font_tasks = [provider.fetch_font(sources[weight]) for weight in font_weights]

    images = theme.images
    header_task = provider.fetch_image(images.header_bar) if images and images.header_bar else _none()
    section_task = provider.fetch_image(images.section_bar) if images and images.section_bar else _none()

    results = await asyncio.gather(header_task, section_task, *font_tasks)
    header_bar, section_bar = results[0], results[1]
    fonts = {weight: payload for weight, payload in zip(font_weights, results[2:]) if payload}
    return RenderAssets(fonts=fonts, header_bar=header_bar, section_bar=section_bar)
