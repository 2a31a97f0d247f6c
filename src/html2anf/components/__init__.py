#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Article components."""

from html2anf.components.base import AnchorPosition, Component
from html2anf.components.image import Image

__all__ = ["AnchorPosition", "Component", "Image"]
