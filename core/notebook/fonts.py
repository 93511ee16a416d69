"""
Font resolution for measurement and rendering.

This module handles:
- Mapping a HandwrittenFont to a local TrueType file
- TTF registration with ReportLab (used for glyph metrics)
- Fallback to DejaVu Sans, then to the built-in Helvetica

Fonts are never downloaded here; a remote url simply falls back.
"""

import logging
import os
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Optional
from urllib.parse import unquote, urlparse

from reportlab.pdfbase import pdfmetrics
from reportlab.pdfbase.ttfonts import TTFont

from .models import HandwrittenFont


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ResolvedFont:
    """A font ready for ReportLab metrics and Pillow drawing"""
    font_id: str
    pdf_font_name: str   # Name registered with ReportLab
    path: Optional[str]  # TrueType file, None for built-in fonts

    @property
    def is_builtin(self) -> bool:
        return self.path is None


class FontResolver:
    """
    Resolves handwritten fonts to a ReportLab font name plus the TTF
    path Pillow draws with. Share one resolver between layout and
    export so both measure and draw the same glyphs.
    """

    # Bundled notebook fonts first, then DejaVu for the fallback
    DEFAULT_SEARCH_PATHS = [
        str(Path(__file__).parent.parent.parent / 'assets' / 'fonts'),
        './assets/fonts/',
        '/usr/share/fonts/truetype/dejavu/',
        '/usr/share/fonts/TTF/',
        os.path.expanduser('~/.local/share/fonts/'),
        '/Library/Fonts/',
    ]

    FONT_SUFFIXES = ('.ttf', '.otf')

    FALLBACK_TTF = ('DejaVuSans', 'DejaVuSans.ttf')
    BUILTIN_FALLBACK = 'Helvetica'

    def __init__(self, additional_paths: Optional[List[str]] = None):
        self.search_paths = list(self.DEFAULT_SEARCH_PATHS)
        if additional_paths:
            self.search_paths.extend(additional_paths)

        self._registered_fonts: Dict[str, str] = {}
        self._file_cache: Dict[str, str] = {}
        self._resolved: Dict[str, ResolvedFont] = {}
        self._fallback: Optional[ResolvedFont] = None

    def find_font_file(self, filename: str) -> Optional[str]:
        """First match for a bare file name across the search paths."""
        cached = self._file_cache.get(filename)
        if cached:
            return cached

        for base in self.search_paths:
            candidate = Path(base) / filename
            if candidate.is_file():
                self._file_cache[filename] = str(candidate)
                return self._file_cache[filename]
        return None

    def register_font(self, font_name: str, font_path: str) -> bool:
        # False when ReportLab cannot read the file
        if font_name in self._registered_fonts:
            return True

        try:
            pdfmetrics.registerFont(TTFont(font_name, font_path))
            self._registered_fonts[font_name] = font_path
            logger.debug(f"Registered font: {font_name} from {font_path}")
            return True
        except Exception as e:
            # ReportLab rejects CFF-flavoured .otf and corrupt files
            logger.warning(f"Failed to register font {font_name}: {e}")
            return False

    def resolve(self, font: HandwrittenFont) -> ResolvedFont:
        """
        Resolve a HandwrittenFont, registering it on first use.

        Results are memoised per font id.
        """
        if font.id in self._resolved:
            return self._resolved[font.id]

        resolved = None
        font_path = self._local_path(font.url)
        if font_path:
            font_name = self._pdf_name(font)
            if self.register_font(font_name, font_path):
                resolved = ResolvedFont(font.id, font_name, font_path)

        if resolved is None:
            logger.warning(
                f"Font '{font.name}' ({font.id}) has no usable local file, using fallback"
            )
            fallback = self._get_fallback()
            resolved = ResolvedFont(font.id, fallback.pdf_font_name, fallback.path)

        self._resolved[font.id] = resolved
        return resolved

    def get_registered_fonts(self) -> Dict[str, str]:
        """Get dict of registered font names to paths."""
        return dict(self._registered_fonts)

    def _local_path(self, url: str) -> Optional[str]:
        """Turn a font url into an existing local file path, if it is one."""
        if not url:
            return None

        parsed = urlparse(url)
        if parsed.scheme in ('http', 'https', 'data'):
            return None
        if parsed.scheme == 'file':
            candidate = Path(unquote(parsed.path))
        else:
            candidate = Path(url).expanduser()

        if candidate.suffix.lower() not in self.FONT_SUFFIXES:
            return None
        if candidate.is_file():
            return str(candidate)
        return self.find_font_file(candidate.name)

    def _get_fallback(self) -> ResolvedFont:
        if self._fallback is None:
            name, filename = self.FALLBACK_TTF
            path = self.find_font_file(filename)
            if path and self.register_font(name, path):
                self._fallback = ResolvedFont('__fallback__', name, path)
            else:
                # Standard fonts are always available in ReportLab
                self._fallback = ResolvedFont('__fallback__', self.BUILTIN_FALLBACK, None)
        return self._fallback

    @staticmethod
    def _pdf_name(font: HandwrittenFont) -> str:
        slug = re.sub(r'[^A-Za-z0-9_-]+', '-', font.id).strip('-') or 'font'
        return f"HW-{slug}"
