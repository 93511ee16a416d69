#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Settings - Centralized configuration management
"""

from pathlib import Path
from typing import List

from pydantic_settings import BaseSettings, SettingsConfigDict


# Base directory
BASE_DIR = Path(__file__).resolve().parent.parent


class Settings(BaseSettings):
    """Application settings"""

    # ========== Page Geometry (pixels at 96 DPI) ==========
    page_width: int = 794  # A4 width
    page_height: int = 1123  # A4 height
    font_size: int = 18
    answer_spacing: int = 1  # Blank lines between answers

    # ========== Layout Caching ==========
    layout_cache_size: int = 100
    measurement_cache_size: int = 1000

    # ========== Export Defaults ==========
    default_quality: int = 300  # DPI-equivalent
    default_format: str = "a4"  # a4 | letter
    default_orientation: str = "portrait"  # portrait | landscape
    default_file_name: str = "handwritten-assignment.pdf"
    compression: bool = True

    # ========== Progressive Rendering ==========
    default_memory_limit_mb: int = 100
    batch_yield_delay: float = 0.05  # seconds between batches

    # ========== Rendering ==========
    character_jitter: float = 0.3  # max per-glyph offset in pixels
    font_dirs: List[str] = []  # Extra directories searched for .ttf files

    # ========== Directories ==========
    output_dir: Path = BASE_DIR / "data" / "output"

    # ========== Logging ==========
    log_level: str = "INFO"

    model_config = SettingsConfigDict(
        env_prefix="NOTEBOOK_",
        env_file=str(BASE_DIR / ".env"),
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",  # Allow extra fields from .env that aren't defined in model
    )

    def print_config(self):
        """Print configuration summary"""
        print("\n" + "=" * 70)
        print("CONFIGURATION")
        print("=" * 70)
        print(f"Page Size:       {self.page_width} x {self.page_height} px")
        print(f"Font Size:       {self.font_size} px")
        print(f"Quality:         {self.default_quality} DPI")
        print(f"Format:          {self.default_format} ({self.default_orientation})")
        print(f"Memory Limit:    {self.default_memory_limit_mb} MB")
        print(f"Output Dir:      {self.output_dir}")
        print("=" * 70 + "\n")


# Global settings instance
settings = Settings()
