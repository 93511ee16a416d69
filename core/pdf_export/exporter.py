"""
PDF Exporter - renders notebook pages into a single PDF.

Pages are rasterised in batches. Between batches the exporter reports
progress and yields to the event loop, which is also the only point
where a cancellation request is honoured.
"""

import asyncio
import io
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Sequence, Tuple, Union

from reportlab.lib.utils import ImageReader
from reportlab.pdfgen import canvas as pdf_canvas

from config.settings import Settings, settings as default_settings
from core.notebook.fonts import FontResolver
from core.notebook.models import CanvasPage, HandwrittenFont, PageStyle

from . import estimation
from .exceptions import (
    EncodingError, ExportCancelledError, ExportValidationError, RenderError,
)
from .options import (
    ExportOptions, OptionsInput, ValidationResult, parse_options, validate_options,
)
from .painter import PagePainter, PageSurface
from .progress import ExportProgress, ExportStage, ProgressCallback, ProgressSink


logger = logging.getLogger(__name__)

PDF_MIME_TYPE = "application/pdf"


@dataclass(frozen=True)
class PdfBlob:
    """In-memory PDF document"""
    data: bytes
    type: str = PDF_MIME_TYPE

    @property
    def size(self) -> int:
        return len(self.data)

    def save(self, path: Union[str, Path]) -> Path:
        output = Path(path)
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_bytes(self.data)
        return output


class PdfExporter:
    """
    Exports CanvasPages to PDF.

    One export at a time per instance; the exporter keeps no rendering
    state between exports.
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        resolver: Optional[FontResolver] = None
    ):
        self.settings = settings or default_settings
        self.resolver = resolver or FontResolver(self.settings.font_dirs)
        self._progress = ProgressSink()
        self._cancel_requested = False

    # ------------------------------------------------------------------
    # Configuration & planning
    # ------------------------------------------------------------------

    def set_progress_callback(self, callback: Optional[ProgressCallback]):
        """Register the single progress callback, replacing any previous one."""
        self._progress.set_callback(callback)

    def cancel(self):
        """Ask the running export to stop at the next batch boundary."""
        self._cancel_requested = True

    @staticmethod
    def validate_options(options: OptionsInput) -> ValidationResult:
        return validate_options(options)

    def should_use_progressive(self, page_count: int, quality: Optional[int] = None) -> bool:
        return estimation.should_use_progressive(
            page_count,
            quality if quality is not None else self.settings.default_quality,
            memory_limit_mb=self.settings.default_memory_limit_mb,
        )

    @staticmethod
    def get_recommended_batch_size(
        page_count: int,
        quality: int,
        memory_limit_mb: Optional[int] = None
    ) -> int:
        return estimation.get_recommended_batch_size(page_count, quality, memory_limit_mb)

    def estimate_file_size(self, page_count: int, quality: Optional[int] = None) -> int:
        return estimation.estimate_file_size(
            page_count, quality if quality is not None else self.settings.default_quality
        )

    def estimate_memory_usage(self, page_count: int, quality: Optional[int] = None) -> float:
        return estimation.estimate_memory_usage(
            page_count, quality if quality is not None else self.settings.default_quality
        )

    @staticmethod
    def format_file_size(size: float) -> str:
        return estimation.format_file_size(size)

    # ------------------------------------------------------------------
    # Export
    # ------------------------------------------------------------------

    async def export_to_pdf(
        self,
        pages: Sequence[CanvasPage],
        font: HandwrittenFont,
        stroke_color: str,
        style: Union[PageStyle, str],
        options: OptionsInput = None
    ) -> PdfBlob:
        """
        Render pages to a PDF document.

        Args:
            pages: Pages to render (emitted in ascending page_number)
            font: Font used for the glyph strokes
            stroke_color: Ink colour, any Pillow colour string
            style: Paper style drawn behind the text
            options: ExportOptions or a mapping of option values

        Returns:
            PdfBlob with MIME type application/pdf

        Raises:
            ExportValidationError: options invalid, nothing rendered
            RenderError: a page failed to render
            EncodingError: the document could not be finalised
            ExportCancelledError: cancel() was called
        """
        opts = parse_options(options, self.settings)
        try:
            style = PageStyle.coerce(style)
        except ValueError as e:
            raise ExportValidationError([str(e)]) from e

        ordered = sorted(pages, key=lambda p: p.page_number)
        total = len(ordered)
        batch_size = opts.batch_size or self.get_recommended_batch_size(
            total, opts.quality, opts.memory_limit_mb
        )
        self._cancel_requested = False

        logger.info(
            f"Exporting {total} pages ({opts.format.value}, {opts.orientation.value}, "
            f"{opts.quality} DPI, batch size {batch_size})"
        )
        await self._emit(ExportStage.PREPARING, 0, total, 0, "Preparing PDF export...")

        # Pages keep their layout geometry and are scaled onto the paper
        surface = PageSurface.from_pixels(self.settings.page_width, self.settings.page_height)
        paper = PageSurface.for_format(opts.format, opts.orientation)
        placement = surface.fit_into(paper)
        painter = PagePainter(
            surface,
            opts.quality,
            self.resolver.resolve(font),
            stroke_color,
            style,
            jitter=self.settings.character_jitter,
        )

        buffer = io.BytesIO()
        pdf = pdf_canvas.Canvas(
            buffer,
            pagesize=paper.size_pt,
            pageCompression=1 if opts.compression else 0,
        )
        pdf.setTitle(Path(opts.file_name).stem)
        pdf.setCreator("notebook-press")

        batches = [ordered[i:i + batch_size] for i in range(0, total, batch_size)]
        done = 0

        for index, batch in enumerate(batches, 1):
            for page in batch:
                self._render_page(pdf, painter, page, placement)
                done += 1
            logger.debug(f"Batch {index}/{len(batches)} rendered ({done}/{total} pages)")

            await self._emit(
                ExportStage.RENDERING, done, total,
                round(done / total * 90, 1),
                f"Rendered batch {index} of {len(batches)} "
                f"(pages {batch[0].page_number}-{batch[-1].page_number})",
            )

            # Yield point between batches
            await asyncio.sleep(self.settings.batch_yield_delay)
            if self._cancel_requested:
                logger.info(f"Export cancelled after {done} of {total} pages")
                raise ExportCancelledError(done, total)

        await self._emit(ExportStage.ENCODING, total, total, 95, "Generating PDF file...")
        await asyncio.sleep(0)

        try:
            pdf.save()
            blob = PdfBlob(buffer.getvalue())
        except Exception as e:
            logger.error(f"PDF encoding failed: {e}")
            raise EncodingError(e) from e

        await self._emit(ExportStage.COMPLETE, total, total, 100, "PDF export complete!")
        logger.info(f"PDF exported: {total} pages, {self.format_file_size(blob.size)}")
        return blob

    async def export_to_file(
        self,
        pages: Sequence[CanvasPage],
        font: HandwrittenFont,
        stroke_color: str,
        style: Union[PageStyle, str],
        path: Optional[Union[str, Path]] = None,
        options: OptionsInput = None
    ) -> Path:
        """Export and write the PDF, by default to settings.output_dir/file_name."""
        opts = parse_options(options, self.settings)
        blob = await self.export_to_pdf(pages, font, stroke_color, style, opts)
        return self.save_pdf(blob, path or Path(self.settings.output_dir) / opts.file_name)

    @staticmethod
    def save_pdf(blob: PdfBlob, path: Union[str, Path]) -> Path:
        output = blob.save(path)
        logger.info(f"PDF saved: {output}")
        return output

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _render_page(
        self,
        pdf: pdf_canvas.Canvas,
        painter: PagePainter,
        page: CanvasPage,
        placement: Tuple[float, float, float, float]
    ):
        image = None
        try:
            image = painter.paint(page)
            x, y, width, height = placement
            pdf.drawImage(ImageReader(image), x, y, width=width, height=height)
            pdf.showPage()
        except Exception as e:
            logger.error(f"Rendering failed on page {page.page_number}: {e}")
            raise RenderError(page.page_number, e) from e
        finally:
            if image is not None:
                image.close()

    async def _emit(
        self,
        stage: ExportStage,
        pages_done: int,
        pages_total: int,
        percentage: float,
        message: str
    ):
        await self._progress.emit(ExportProgress(
            stage=stage,
            pages_done=pages_done,
            pages_total=pages_total,
            percentage=percentage,
            message=message,
        ))
