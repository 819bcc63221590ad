from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass

from resumeflow.assets import AssetProvider, RenderAssets, load_render_assets
from resumeflow.config import Settings, get_settings
from resumeflow.render.backend import RecordingBackend, ReportLabBackend
from resumeflow.render.composer import SectionComposer
from resumeflow.render.fonts import FontRegistry
from resumeflow.render.primitives import DrawPrimitive, PageGeometry
from resumeflow.types import Document, HeaderSection, Theme

logger = logging.getLogger(__name__)


@dataclass
class RenderResult:
    pdf_bytes: bytes
    page_count: int
    primitives: list[DrawPrimitive]


def page_geometry(settings: Settings | None = None) -> PageGeometry:
    settings = settings or get_settings()
    return PageGeometry(width=float(settings.page_width), height=float(settings.page_height))


def _document_title(document: Document) -> str | None:
    for section in document.sections:
        if isinstance(section, HeaderSection) and section.name.strip():
            return section.name.strip()
    return None


def _font_registry(theme: Theme, assets: RenderAssets) -> FontRegistry:
    registry = FontRegistry()
    for weight, payload in assets.fonts.items():
        if weight in ('normal', 'bold'):
            registry.register_truetype(theme.font_family, weight, payload)
    # A single weight stands in for the missing one.
    for weight, other in (('normal', 'bold'), ('bold', 'normal')):
        if not registry.is_registered(theme.font_family, weight) and registry.is_registered(theme.font_family, other):
            registry.register_alias(
                theme.font_family,
                weight,
                registry.registered_name(theme.font_family, other),
            )
    return registry


def compose_primitives(
    theme: Theme,
    document: Document,
    *,
    page: PageGeometry | None = None,
    assets: RenderAssets | None = None,
    backend: RecordingBackend | None = None,
) -> RecordingBackend:
    """Run composition only; the returned backend holds the primitive stream."""
    assets = assets or RenderAssets()
    if backend is None:
        backend = RecordingBackend(page or PageGeometry(), _font_registry(theme, assets))
    composer = SectionComposer(theme, backend, page=page or backend.page, assets=assets)
    composer.compose(document)
    return backend


async def load_theme_assets(
    theme: Theme,
    *,
    settings: Settings | None = None,
    provider: AssetProvider | None = None,
) -> RenderAssets:
    settings = settings or get_settings()
    provider = provider or AssetProvider.from_settings(settings)
    return await load_render_assets(
        theme,
        provider,
        font_sources=settings.font_paths(theme.font_family),
    )


def compose_document(
    theme: Theme,
    document: Document,
    *,
    settings: Settings | None = None,
    page: PageGeometry | None = None,
    provider: AssetProvider | None = None,
) -> RecordingBackend:
    """Compose with the same assets a render would load, without writing a PDF."""
    settings = settings or get_settings()
    assets = asyncio.run(load_theme_assets(theme, settings=settings, provider=provider))
    return compose_primitives(theme, document, page=page or page_geometry(settings), assets=assets)


async def render_document_async(
    theme: Theme,
    document: Document,
    *,
    settings: Settings | None = None,
    page: PageGeometry | None = None,
    provider: AssetProvider | None = None,
) -> RenderResult:
    settings = settings or get_settings()
    assets = await load_theme_assets(theme, settings=settings, provider=provider)
    return render_with_assets(theme, document, assets=assets, settings=settings, page=page)


def render_with_assets(
    theme: Theme,
    document: Document,
    *,
    assets: RenderAssets,
    settings: Settings | None = None,
    page: PageGeometry | None = None,
) -> RenderResult:
    settings = settings or get_settings()
    page = page or page_geometry(settings)
    backend = ReportLabBackend(
        page,
        _font_registry(theme, assets),
        title=_document_title(document),
        producer=settings.pdf_producer,
        invariant=settings.pdf_invariant,
    )
    composer = SectionComposer(theme, backend, page=page, assets=assets)
    page_count = composer.compose(document)
    pdf_bytes = backend.finalize()
    logger.info(
        'Rendered %d section(s) with theme %s: %d page(s), %d primitives',
        len(document.sections),
        theme.key,
        page_count,
        len(backend.primitives),
    )
    return RenderResult(pdf_bytes=pdf_bytes, page_count=page_count, primitives=list(backend.primitives))


def render_document(
    theme: Theme,
    document: Document,
    *,
    settings: Settings | None = None,
    page: PageGeometry | None = None,
    provider: AssetProvider | None = None,
) -> RenderResult:
    return asyncio.run(
        render_document_async(theme, document, settings=settings, page=page, provider=provider)
    )
