# css2android/__init__.py
from .translator.generator import (
    convert,
    convert_css_to_colors_xml,
    convert_css_to_styles_xml,
)

__all__ = ["convert", "convert_css_to_styles_xml", "convert_css_to_colors_xml"]
