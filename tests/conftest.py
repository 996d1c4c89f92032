import io
from collections.abc import Callable, Sequence

import pytest
from reportlab.lib.pagesizes import A4
from reportlab.pdfgen import canvas

PdfBuilder = Callable[[Sequence[Sequence[str]]], bytes]


def render_pdf(pages: Sequence[Sequence[str]]) -> bytes:
    """Render one PDF page per entry, drawing each line of text top-down."""
    buf = io.BytesIO()
    doc = canvas.Canvas(buf, pagesize=A4)
    _, height = A4
    for lines in pages:
        y = height - 72
        for line in lines:
            doc.drawString(72, y, line)
            y -= 18
        doc.showPage()
    doc.save()
    return buf.getvalue()


@pytest.fixture()
def pdf_builder() -> PdfBuilder:
    return render_pdf


@pytest.fixture()
def sample_pdf_bytes() -> bytes:
    """Single page of study notes."""
    return render_pdf([["Photosynthesis converts light"]])


@pytest.fixture()
def multi_page_pdf_bytes() -> bytes:
    return render_pdf([["Chapter one notes"], ["Chapter two notes"]])


@pytest.fixture()
def empty_pdf_bytes() -> bytes:
    """A valid PDF whose only page has no text."""
    return render_pdf([[]])
