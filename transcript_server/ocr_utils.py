# -*- coding: utf-8 -*-
import io
import logging
import os
import tempfile
from pathlib import Path

import pdfplumber
import pytesseract
import requests
from PIL import Image, UnidentifiedImageError

logger = logging.getLogger(__name__)

IMAGE_SUFFIXES = (".png", ".jpg", ".jpeg", ".gif", ".bmp", ".tif", ".tiff", ".webp")
PDF_SUFFIX = ".pdf"
OCR_FAILURE_TEXT = "Failed to extract text from transcript."

_tesseract_cmd = os.getenv("TESSERACT_CMD")
if _tesseract_cmd:
    pytesseract.pytesseract.tesseract_cmd = _tesseract_cmd


class TranscriptExtractionError(RuntimeError):
    """Raised when a transcript file cannot be read or recognized."""


def is_supported_transcript(path: str) -> bool:
    return Path(path).suffix.lower() in IMAGE_SUFFIXES + (PDF_SUFFIX,)


def _load_transcript_path(path_or_url: str) -> str:
    """
    Loads a transcript from a local path or a URL and returns the local file path.
    :param path_or_url: A local file path or a URL to an image or PDF.
    :return: The local file path to the transcript.
    """
    if path_or_url.startswith('http://') or path_or_url.startswith('https://'):
        suffix = Path(path_or_url.split('?', 1)[0]).suffix or ".png"
        response = requests.get(path_or_url, timeout=30)
        response.raise_for_status()
        with tempfile.NamedTemporaryFile(delete=False, suffix=suffix) as tmp_file:
            tmp_file.write(response.content)
            return tmp_file.name
    else:
        path = Path(path_or_url)
        if not path.is_file():
            raise FileNotFoundError(f"File not found: {path}")
        return str(path)


def _recognize_image(image: Image.Image) -> str:
    # Tesseract does best on a single grayscale channel
    return pytesseract.image_to_string(image.convert("L"))


def _extract_pdf_text(pdf_file) -> str:
    pages: list[str] = []
    with pdfplumber.open(pdf_file) as pdf:
        for page in pdf.pages:
            text = page.extract_text()
            if text:
                pages.append(text.strip())
    return "\n".join(pages)


def extract_transcript_text_from_content(content: bytes, filename: str = "") -> str:
    """
    Recognize text from uploaded transcript bytes.

    PDFs with a text layer are read directly; everything else goes through OCR.

    :param content: Raw file bytes.
    :param filename: Original file name, used to tell PDFs from images.
    :return: Line-oriented recognized text.
    """
    if filename.lower().endswith(PDF_SUFFIX) or content[:5] == b"%PDF-":
        return _extract_pdf_text(io.BytesIO(content))
    try:
        with Image.open(io.BytesIO(content)) as image:
            return _recognize_image(image)
    except UnidentifiedImageError as e:
        raise TranscriptExtractionError(f"Unsupported transcript file: {filename or 'upload'}") from e


def extract_transcript_text(path_or_url: str) -> str:
    """
    Extracts text from a local or remote transcript image or PDF.
    Blocking; callers in async code should run it in a thread.
    :param path_or_url: A local file path or a URL.
    :return: The recognized text of the transcript
    """
    local_path = _load_transcript_path(path_or_url)
    logger.debug("Recognizing transcript %s", local_path)
    with open(local_path, "rb") as f:
        content = f.read()
    return extract_transcript_text_from_content(content, local_path)
