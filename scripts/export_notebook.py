#!/usr/bin/env python3
"""
CLI entry point for exporting answers as a handwritten notebook PDF.

Usage:
    python -m scripts.export_notebook answers.json -o answers.pdf
    python -m scripts.export_notebook answers.json --style lined --quality 150
    python -m scripts.export_notebook answers.json --font-url fonts/Caveat-Regular.ttf
"""

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path

# Ensure project root is on path
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))


def load_answers(path: Path):
    from core.notebook import Answer

    data = json.loads(path.read_text(encoding="utf-8"))
    if isinstance(data, dict):
        data = data.get("answers", [])
    return [Answer.from_dict(item) for item in data]


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Handwritten notebook PDF export")
    parser.add_argument("answers", type=Path, help="JSON file with answers")
    parser.add_argument("-o", "--output", type=Path, default=None, help="Output PDF path")
    parser.add_argument("--style", default="ruled", help="ruled | lined | unruled")
    parser.add_argument("--color", default="#1a1a1a", help="Ink colour")
    parser.add_argument("--font-id", default="default")
    parser.add_argument("--font-family", default="Handwriting")
    parser.add_argument("--font-url", default="", help="Path to a .ttf file")
    parser.add_argument("--quality", type=int, default=None, help="DPI (72-600)")
    parser.add_argument("--format", dest="page_format", default=None, help="a4 | letter")
    parser.add_argument("--orientation", default=None, help="portrait | landscape")
    parser.add_argument("--batch-size", type=int, default=None)
    parser.add_argument("--memory-limit", type=int, default=None, help="MB")
    return parser


async def run(args) -> int:
    from core.layout_engine import LayoutEngine, TextMeasurer
    from core.notebook import HandwrittenFont
    from core.pdf_export import ExportError, ExportValidationError, PdfExporter

    options = {
        "quality": args.quality,
        "format": args.page_format,
        "orientation": args.orientation,
        "batch_size": args.batch_size,
        "memory_limit_mb": args.memory_limit,
    }
    if args.output:
        options["file_name"] = args.output.name

    exporter = PdfExporter()
    result = exporter.validate_options(options)
    if not result.valid:
        print("Invalid options:")
        for err in result.errors:
            print(f"  - {err}")
        return 2

    font = HandwrittenFont(
        id=args.font_id,
        name=args.font_family,
        family=args.font_family,
        url=args.font_url,
    )

    # Measure with the same fonts the exporter draws with
    engine = LayoutEngine(measurer=TextMeasurer(resolver=exporter.resolver))
    try:
        layout = engine.calculate_layout(load_answers(args.answers), font, args.style)
    except ValueError as e:
        print(f"Error: {e}")
        return 2
    finally:
        engine.destroy()

    quality = args.quality or exporter.settings.default_quality
    estimate = exporter.estimate_file_size(layout.total_pages, quality)
    print(
        f"{layout.total_pages} pages, {layout.total_lines} lines "
        f"(estimated {exporter.format_file_size(estimate)}, "
        f"~{exporter.estimate_memory_usage(layout.total_pages, quality)} MB)"
    )

    exporter.set_progress_callback(
        lambda p: print(f"  [{p.percentage:5.1f}%] {p.stage.value}: {p.message}")
    )

    try:
        output = await exporter.export_to_file(
            layout.pages, font, args.color, args.style,
            path=args.output, options=options,
        )
    except ExportValidationError as e:
        print(f"Invalid options: {e}")
        return 2
    except ExportError as e:
        print(f"Export failed ({e.kind}): {e}")
        return 1

    print(f"Saved: {output}")
    return 0


def main():
    from config.settings import settings

    logging.basicConfig(level=settings.log_level.upper(), format="%(levelname)s %(name)s: %(message)s")

    args = build_parser().parse_args()
    sys.exit(asyncio.run(run(args)))


if __name__ == "__main__":
    main()
