"""
PDF Export - batched, progress-reporting PDF export of notebook pages.

This module provides:
- Option validation (all violations reported at once)
- Size / memory estimation and batch planning
- Page rasterisation with Pillow
- PDF assembly with ReportLab

Usage:
    from core.pdf_export import PdfExporter

    exporter = PdfExporter()
    exporter.set_progress_callback(lambda p: print(p.stage.value, p.percentage))

    blob = await exporter.export_to_pdf(
        layout.pages, font, "#1a1a1a", "ruled", {"quality": 150}
    )
    exporter.save_pdf(blob, "answers.pdf")
"""

from .exporter import PdfExporter, PdfBlob, PDF_MIME_TYPE
from .options import (
    ExportOptions,
    ExportFormat,
    Orientation,
    ValidationResult,
    validate_options,
    parse_options,
)
from .progress import ExportProgress, ExportStage, ProgressSink
from .painter import PagePainter, PageSurface
from .estimation import (
    estimate_file_size,
    estimate_memory_usage,
    should_use_progressive,
    get_recommended_batch_size,
    format_file_size,
)
from .exceptions import (
    ExportError,
    ExportValidationError,
    RenderError,
    EncodingError,
    ExportCancelledError,
)


__all__ = [
    # Main exporter
    'PdfExporter',
    'PdfBlob',
    'PDF_MIME_TYPE',

    # Options
    'ExportOptions',
    'ExportFormat',
    'Orientation',
    'ValidationResult',
    'validate_options',
    'parse_options',

    # Progress
    'ExportProgress',
    'ExportStage',
    'ProgressSink',

    # Rendering
    'PagePainter',
    'PageSurface',

    # Estimation
    'estimate_file_size',
    'estimate_memory_usage',
    'should_use_progressive',
    'get_recommended_batch_size',
    'format_file_size',

    # Exceptions
    'ExportError',
    'ExportValidationError',
    'RenderError',
    'EncodingError',
    'ExportCancelledError',
]


__version__ = '1.0.0'
