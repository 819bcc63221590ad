from __future__ import annotations

import logging

from ..assets import RenderAssets
from ..types import BulletSection, Document, ExperienceSection, HeaderSection, Job, Role, SummarySection, Theme
from .bullets import draw_bullet
from .ghost import (
    BULLET_MARKER,
    CONTACT_MARKER,
    HEADING_MARKER,
    SECTION_MARKER,
    SUBSECTION_MARKER,
    GhostTagEmitter,
)
from .pagination import PaginationEngine
from .primitives import FontSpec, FontWeight, PageGeometry
from .textflow import flow_inline_text
from .units import line_advance, pt_to_length, px_to_length

logger = logging.getLogger(__name__)

# Conservative block heights (length units) checked before a block starts.
SECTION_SPACE = 30.0
JOB_SPACE = 40.0
ROLE_SPACE = 30.0
BULLET_SPACE = 15.0

PREFIX_FONT_SIZE = 10.0
CAP_HEIGHT_RATIO = 0.7
HEADER_BAR_GAP = 2.0
BULLET_TEXT_INDENT = 10.0


class SectionComposer:
    def __init__(
        self,
        theme: Theme,
        backend,
        *,
        page: PageGeometry | None = None,
        assets: RenderAssets | None = None,
    ):
        self.theme = theme
        self.backend = backend
        self.page = page or backend.page
        self.assets = assets or RenderAssets()
        self.margin = float(theme.margin)
        self.ghost = GhostTagEmitter(theme.background)
        self.pagination = PaginationEngine(
            backend,
            page=self.page,
            margin=self.margin,
            background=theme.background,
        )

    @property
    def y(self) -> float:
        return self.pagination.cursor_y

    @property
    def content_width(self) -> float:
        return self.page.width - 2 * self.margin

    def _font(self, weight: FontWeight, size_key: str) -> FontSpec:
        return FontSpec(family=self.theme.font_family, weight=weight, size=self.theme.font_size(size_key))

    def _advance_px(self, key: str) -> None:
        self.pagination.advance(px_to_length(self.theme.spacing_px(key)))

    def _advance_pt(self, key: str) -> None:
        self.pagination.advance(pt_to_length(self.theme.font_size(key)))

    def _place_prefix(self, key: str, x: float, font: FontSpec, *color_keys: str) -> float:
        prefix = self.theme.prefix(key)
        if not prefix:
            return x
        self.backend.place_text(prefix, x, self.y, font=font, color=self.theme.first_color(*color_keys))
        return x + self.backend.measure_text_width(prefix, font)

    def compose(self, document: Document) -> int:
        """Emit the primitive stream for `document`; returns the page count."""
        self.pagination.paint_background()
        for section in document.sections:
            if isinstance(section, HeaderSection):
                self._compose_header(section)
            elif isinstance(section, SummarySection):
                self._compose_summary(section)
            elif isinstance(section, BulletSection):
                self._compose_bullet_section(section)
            elif isinstance(section, ExperienceSection):
                self._compose_experience(section)
        return self.pagination.page_index + 1

    def _compose_header(self, section: HeaderSection) -> None:
        theme = self.theme
        self.pagination.ensure_space(SECTION_SPACE)

        name_font = self._font('bold', 'h1')
        self.ghost.emit(self.backend, HEADING_MARKER, self.margin, self.y, name_font)

        name_x = self._place_prefix('h1', self.margin, name_font.with_size(PREFIX_FONT_SIZE), 'prefix_green', 'heading')

        name = section.name.upper() if theme.header.uppercase_name else section.name
        if theme.header.centered_name:
            name_x = (self.page.width - self.backend.measure_text_width(name, name_font)) / 2
        self.backend.place_text(name, name_x, self.y, font=name_font, color=theme.color('name'))

        self._advance_pt('h1')
        self._advance_px('h1_margin_bottom')

        if section.contact:
            contact_font = self._font('normal', 'sub_header')
            self.ghost.emit(self.backend, CONTACT_MARKER, self.margin, self.y, contact_font)
            contact_x = self._place_prefix('sub_header', self.margin, contact_font, 'prefix_green', 'heading')
            self.backend.place_text(section.contact, contact_x, self.y, font=contact_font, color=theme.color('role'))
            self._advance_pt('sub_header')

            if self.assets.header_bar and theme.images is not None:
                bar_height = theme.images.header_bar_height
                self.backend.draw_image(self.assets.header_bar, self.margin, self.y, self.content_width, bar_height)
                self.pagination.advance(bar_height + HEADER_BAR_GAP)

            self._advance_px('sub_header_margin_bottom')

        divider = theme.divider_after_header
        if divider is not None:
            self.backend.draw_line(
                self.margin,
                self.y,
                self.page.width - self.margin,
                self.y,
                color=divider.color,
                width=divider.width,
            )
            self.pagination.advance(divider.gap)

    def _compose_summary(self, section: SummarySection) -> None:
        self.pagination.ensure_space(SECTION_SPACE)
        self._flow_block(section.text, x=self.margin, max_width=self.content_width, size_key='body')
        self._advance_px('h2_margin_top')

    def _flow_block(self, text: str, *, x: float, max_width: float, size_key: str) -> None:
        font = self._font('normal', size_key)
        line_height = self.theme.line_height(size_key)
        result = flow_inline_text(
            self.backend,
            text,
            x=x,
            y=self.y,
            max_width=max_width,
            font=font,
            line_height=line_height,
            color=self.theme.color('text'),
            ghost=self.ghost,
        )
        # cursor moves to the baseline below the last written line
        self.pagination.cursor_y = result.y + line_advance(font.size, line_height)

    def _compose_section_title(self, title: str) -> None:
        theme = self.theme
        self.pagination.ensure_space(SECTION_SPACE)
        self._advance_px('h2_margin_top')

        title_font = self._font('bold', 'h2')
        cap_height = pt_to_length(title_font.size) * CAP_HEIGHT_RATIO

        if self.assets.section_bar and theme.images is not None:
            images = theme.images
            bar_y = (self.y - cap_height / 2) - images.section_bar_height / 2
            self.backend.draw_image(
                self.assets.section_bar,
                self.margin + images.section_bar_offset,
                bar_y,
                images.section_bar_width,
                images.section_bar_height,
            )

        self.ghost.emit(self.backend, SECTION_MARKER, self.margin, self.y, title_font)
        title_x = self._place_prefix('h2', self.margin, title_font, 'prefix_green', 'heading')

        box = theme.bordered_title
        text_color = theme.color('heading')
        if box is not None:
            box_y = self.y - cap_height - box.padding
            box_height = cap_height + box.padding * 2
            self.backend.draw_rect(self.margin, box_y, self.content_width, box_height, color=box.fill, fill=True)
            self.backend.draw_line(
                self.margin,
                box_y,
                self.margin,
                box_y + box_height,
                color=box.border_color,
                width=box.border_width,
            )
            title_x += box.text_inset
            text_color = box.text_color

        self.backend.place_text(title.upper(), title_x, self.y, font=title_font, color=text_color)
        self._advance_pt('h2')
        self._advance_px('h2_margin_bottom')

    def _compose_bullet(self, text: str) -> None:
        theme = self.theme
        self.pagination.ensure_space(BULLET_SPACE)

        bullet_font = self._font('normal', 'li')
        self.ghost.emit(self.backend, BULLET_MARKER, self.margin, self.y, bullet_font)
        draw_bullet(
            self.backend,
            theme.bullet_shape,
            left=self.margin,
            baseline=self.y,
            color=theme.first_color('bullet_color', 'prefix_green', 'text'),
            glyph=theme.prefix('bullet'),
            font=bullet_font,
        )

        self._flow_block(
            text,
            x=self.margin + BULLET_TEXT_INDENT,
            max_width=self.content_width - BULLET_TEXT_INDENT,
            size_key='li',
        )
        self._advance_px('li_margin_bottom')

    def _compose_bullet_section(self, section: BulletSection) -> None:
        self._compose_section_title(section.title)
        for bullet in section.bullets:
            self._compose_bullet(bullet)

    def _compose_experience(self, section: ExperienceSection) -> None:
        self._compose_section_title(section.title)
        for job in section.jobs:
            self._compose_job(job)

    def _compose_job(self, job: Job) -> None:
        theme = self.theme
        self.pagination.ensure_space(JOB_SPACE)

        if job.company:
            self._advance_px('h3_margin_top')
            company_font = self._font('bold', 'h3')
            self.ghost.emit(self.backend, SUBSECTION_MARKER, self.margin, self.y, company_font)
            company_x = self._place_prefix('h3', self.margin, company_font, 'prefix_gray', 'role')
            self.backend.place_text(job.company, company_x, self.y, font=company_font, color=theme.color('text'))
            self._advance_pt('h3')
            self._advance_px('job_header_margin_bottom')

        for role in job.roles:
            self._compose_role(role)

        self.pagination.advance(px_to_length(theme.spacing_px('section_margin_bottom')) / 2)

    def _compose_role(self, role: Role) -> None:
        theme = self.theme
        self.pagination.ensure_space(ROLE_SPACE)

        if role.title or role.period:
            meta_font = self._font('normal', 'sub_header')
            meta_x = self._place_prefix('job_meta', self.margin, meta_font, 'prefix_gray', 'role')
            if role.title:
                self.backend.place_text(role.title, meta_x, self.y, font=meta_font, color=theme.color('role'))
            if role.period:
                self.backend.place_text(
                    role.period,
                    self.page.width - self.margin,
                    self.y,
                    font=meta_font,
                    color=theme.color('role'),
                    align='right',
                )
            self._advance_pt('sub_header')
            self._advance_px('job_header_margin_bottom')

        for bullet in role.bullets:
            self._compose_bullet(bullet)

        self._advance_px('ul_margin_bottom')
