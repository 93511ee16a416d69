"""
Size and memory estimates used to plan an export.

All estimates are monotonic in page count and quality. They guide
batching and user-facing warnings; they are not guarantees.
"""

import math
from typing import Optional


SCREEN_DPI = 96
DEFAULT_QUALITY = 300

# A4 surface at screen DPI
PAGE_WIDTH_PX = 794
PAGE_HEIGHT_PX = 1123

BYTES_PER_PIXEL = 4  # RGBA working buffer
RASTER_OVERHEAD = 1.5  # surface + encoded image + PDF object
BASE_PAGE_BYTES = 200 * 1024  # compressed page at DEFAULT_QUALITY
PDF_OVERHEAD_BYTES = 2048  # header, catalog, xref

DEFAULT_MEMORY_LIMIT_MB = 100

_MB = 1024 * 1024


def quality_factor(quality: float) -> float:
    """Raster area relative to a screen-DPI surface."""
    return (quality / SCREEN_DPI) ** 2


def page_raster_bytes(quality: float) -> float:
    scale = quality / SCREEN_DPI
    return (PAGE_WIDTH_PX * scale) * (PAGE_HEIGHT_PX * scale) * BYTES_PER_PIXEL


def estimate_file_size(page_count: int, quality: float = DEFAULT_QUALITY) -> int:
    """Approximate PDF size in bytes."""
    pages = max(page_count, 0)
    return PDF_OVERHEAD_BYTES + round(pages * BASE_PAGE_BYTES * quality / DEFAULT_QUALITY)


def estimate_memory_usage(page_count: int, quality: float = DEFAULT_QUALITY) -> float:
    """Approximate peak memory in MB for rendering `page_count` pages."""
    pages = max(page_count, 1)
    total = page_raster_bytes(quality) * pages * RASTER_OVERHEAD
    return round(total / _MB, 2)


def should_use_progressive(
    page_count: int,
    quality: float = DEFAULT_QUALITY,
    memory_limit_mb: float = DEFAULT_MEMORY_LIMIT_MB,
) -> bool:
    """
    Batched rendering is recommended once the raster working set of the
    whole document would exceed the memory limit.

    Depends only on page_count * quality_factor(quality).
    """
    working_set = page_raster_bytes(quality) * max(page_count, 0) * RASTER_OVERHEAD
    return working_set / _MB > memory_limit_mb


def get_recommended_batch_size(
    page_count: int,
    quality: float,
    memory_limit_mb: Optional[float] = None,
) -> int:
    """
    Pages per batch. Higher quality gives smaller batches.

    With a memory limit the batch is shrunk until one batch's estimate
    fits, but never below one page.
    """
    if quality >= 600:
        batch = 3
    elif quality >= 300:
        batch = 5
    else:
        batch = 10

    if memory_limit_mb is not None:
        per_page = estimate_memory_usage(1, quality)
        batch = min(batch, math.floor(memory_limit_mb / per_page))

    return max(1, batch)


def format_file_size(size: float) -> str:
    """Human readable size: '500 B', '1.0 KB', '1.0 MB'."""
    if size < 1024:
        return f"{int(size)} B"
    if size < _MB:
        return f"{size / 1024:.1f} KB"
    return f"{size / _MB:.1f} MB"
