"""Receipt rendering: on-screen preview sections, PDF and regeneration."""
from .preview import PreviewRow, PreviewSection, build_preview, laid_out_fields
from .pdf import build_receipt_pdf, pdf_filename
from .regenerator import PDF_NOT_AVAILABLE, Debouncer, PdfArtifact, PdfRegenerator

__all__ = [
    "PreviewRow",
    "PreviewSection",
    "build_preview",
    "laid_out_fields",
    "build_receipt_pdf",
    "pdf_filename",
    "PDF_NOT_AVAILABLE",
    "Debouncer",
    "PdfArtifact",
    "PdfRegenerator",
]
