"""
PDF Export Custom Exceptions
"""

from typing import List, Optional


class ExportError(Exception):
    """Base exception for PDF export"""
    kind = "export"

    def __init__(
        self,
        message: str,
        page_number: Optional[int] = None,
        cause: Optional[BaseException] = None
    ):
        self.page_number = page_number
        self.cause = cause
        super().__init__(message)

    def to_dict(self) -> dict:
        return {
            "kind": self.kind,
            "message": str(self),
            "page_number": self.page_number,
            "cause": repr(self.cause) if self.cause else None,
        }


class ExportValidationError(ExportError):
    """Export options failed validation"""
    kind = "validation"

    def __init__(self, errors: List[str]):
        self.errors = list(errors)
        super().__init__(f"Invalid export options: {'; '.join(self.errors)}")


class RenderError(ExportError):
    """A page could not be rendered"""
    kind = "rendering"

    def __init__(self, page_number: int, cause: BaseException):
        super().__init__(
            f"Failed to render page {page_number}: {cause}",
            page_number=page_number,
            cause=cause,
        )


class EncodingError(ExportError):
    """The final PDF could not be assembled"""
    kind = "encoding"

    def __init__(self, cause: BaseException):
        super().__init__(f"Failed to encode PDF: {cause}", cause=cause)


class ExportCancelledError(ExportError):
    """Export cancelled at a batch boundary"""
    kind = "cancelled"

    def __init__(self, pages_done: int = 0, pages_total: int = 0):
        self.pages_done = pages_done
        self.pages_total = pages_total
        super().__init__(f"Export cancelled after {pages_done} of {pages_total} pages")
