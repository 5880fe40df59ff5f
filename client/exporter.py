"""PDF export of summary texts."""
import io
import logging
from dataclasses import dataclass
from typing import List, Optional, Tuple

from PIL import Image, ImageDraw, ImageFont, features
from reportlab.lib.pagesizes import A4
from reportlab.lib.units import mm
from reportlab.lib.utils import ImageReader, simpleSplit
from reportlab.pdfgen import canvas

from client.models import Language
from shared.config import settings
from shared.utils import split_words

logger = logging.getLogger(__name__)

PAGE_WIDTH, PAGE_HEIGHT = A4
MARGIN = 20 * mm
USABLE_WIDTH = PAGE_WIDTH - 2 * MARGIN
USABLE_HEIGHT = PAGE_HEIGHT - 2 * MARGIN

TITLES = {
    Language.ENGLISH: "Summary (English)",
    Language.URDU: "Summary (Urdu)",
}


@dataclass
class ExportedDocument:
    """A rendered document ready to be downloaded."""
    filename: str
    data: bytes
    content_type: str = "application/pdf"


class PdfExporter:
    """Renders summary texts into paginated A4 PDF documents."""

    def __init__(
        self,
        font_path: Optional[str] = None,
        font_size: Optional[int] = None,
        image_width: int = 1400
    ):
        self.font_path = font_path or settings.export_urdu_font_path
        self.font_size = font_size or settings.export_font_size
        self.image_width = image_width

    def export(self, text: str, language: Language) -> ExportedDocument:
        if language == Language.ENGLISH:
            data = self.render_text(text, TITLES[language])
        else:
            data = self.render_rtl_image(text, TITLES[language])
        return ExportedDocument(filename=f"summary-{language.value}.pdf", data=data)

    def render_text(self, text: str, title: str) -> bytes:
        """Lay out plain text, wrapping long lines and breaking pages."""
        buffer = io.BytesIO()
        pdf = canvas.Canvas(buffer, pagesize=A4)
        pdf.setTitle(title)

        font, size, leading = "Helvetica", 12, 16
        y = PAGE_HEIGHT - MARGIN

        pdf.setFont("Helvetica-Bold", 16)
        pdf.drawString(MARGIN, y, title)
        y -= 2 * leading
        pdf.setFont(font, size)

        for paragraph in text.splitlines() or [""]:
            lines = simpleSplit(paragraph, font, size, USABLE_WIDTH) or [""]
            for line in lines:
                if y < MARGIN:
                    pdf.showPage()
                    pdf.setFont(font, size)
                    y = PAGE_HEIGHT - MARGIN
                pdf.drawString(MARGIN, y, line)
                y -= leading

        pdf.save()
        return buffer.getvalue()

    def _font(self) -> ImageFont.ImageFont:
        if self.font_path:
            return ImageFont.truetype(self.font_path, self.font_size)
        logger.warning("No Urdu font configured, using Pillow's default font")
        return ImageFont.load_default(size=self.font_size)

    def _wrap(self, draw: ImageDraw.ImageDraw, text: str, font, max_width: int) -> List[str]:
        lines = []
        for paragraph in text.splitlines() or [""]:
            current = ""
            for word in split_words(paragraph):
                candidate = f"{current} {word}".strip()
                if current and draw.textlength(candidate, font=font) > max_width:
                    lines.append(current)
                    current = word
                else:
                    current = candidate
            lines.append(current)
        return lines

    @property
    def padding(self) -> int:
        return self.font_size

    @property
    def line_height(self) -> int:
        return int(self.font_size * 1.8)

    def page_slices(self, height: int, max_height: int) -> List[Tuple[int, int]]:
        """
        Split an image of the given height into page sized bands.

        Every cut except the last falls on a line boundary so no text line is
        split across pages. A band that cannot hold one whole line is cut at
        max_height instead.
        """
        slices = []
        top = 0
        while top < height:
            bottom = top + max_height
            if bottom < height:
                aligned = self.padding + (bottom - self.padding) // self.line_height * self.line_height
                if aligned > top:
                    bottom = aligned
            bottom = min(bottom, height)
            slices.append((top, bottom))
            top = bottom
        return slices

    def render_image(self, text: str) -> Image.Image:
        """Draw right-to-left text, right aligned, onto a white image."""
        font = self._font()
        padding = self.padding
        max_width = self.image_width - 2 * padding
        direction = "rtl" if features.check("raqm") else None

        measure = ImageDraw.Draw(Image.new("RGB", (1, 1)))
        lines = self._wrap(measure, text, font, max_width)
        line_height = self.line_height
        height = max(line_height * len(lines) + 2 * padding, 1)

        image = Image.new("RGB", (self.image_width, height), "white")
        draw = ImageDraw.Draw(image)
        y = padding
        for line in lines:
            width = draw.textlength(line, font=font, direction=direction)
            draw.text(
                (self.image_width - padding - width, y),
                line,
                font=font,
                fill="black",
                direction=direction
            )
            y += line_height
        return image

    def render_rtl_image(self, text: str, title: str) -> bytes:
        """
        Embed the rendered text as an image scaled to the page width.

        Generic PDF text layout does not shape Urdu script, so the text is
        rasterized first. Images taller than a page are sliced across pages.
        """
        image = self.render_image(text)
        scale = USABLE_WIDTH / image.width
        slice_height = max(int(USABLE_HEIGHT / scale), 1)

        buffer = io.BytesIO()
        pdf = canvas.Canvas(buffer, pagesize=A4)
        pdf.setTitle(title)

        for top, bottom in self.page_slices(image.height, slice_height):
            part = image.crop((0, top, image.width, bottom))
            drawn_height = part.height * scale
            pdf.drawImage(
                ImageReader(part),
                MARGIN,
                PAGE_HEIGHT - MARGIN - drawn_height,
                width=USABLE_WIDTH,
                height=drawn_height
            )
            pdf.showPage()

        pdf.save()
        return buffer.getvalue()
