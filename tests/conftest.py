"""Shared fixtures for the sprite pipeline tests."""

import io

import pytest
from PIL import Image


def png_bytes(width: int, height: int, color: tuple[int, int, int, int] = (255, 0, 0, 255)) -> bytes:
    """Encode a solid-color RGBA PNG."""
    buffer = io.BytesIO()
    Image.new("RGBA", (width, height), color).save(buffer, format="PNG")
    return buffer.getvalue()


@pytest.fixture
def make_png():
    """Factory for small in-memory PNG images."""
    return png_bytes
