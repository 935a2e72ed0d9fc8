"""CSS generation: declaration mapping and per-node file output."""

from .css_generator import generate_class_name, generate_css, generate_css_file_content
from .file_generator import CSSWriteError, create_css_file, create_css_files, generate_file_path

__all__ = [
    "CSSWriteError",
    "create_css_file",
    "create_css_files",
    "generate_class_name",
    "generate_css",
    "generate_css_file_content",
    "generate_file_path",
]
