# io_utils/__init__.py
"""
I/O helpers package for grafi: Pillow image conversion and result files.
"""
from .image_handler import read_image, save_image, to_image, from_image, detect_is_rgba
from .file_utils import make_result_filename, save_parameters_txt, zip_results

__all__ = [
    "read_image",
    "save_image",
    "to_image",
    "from_image",
    "detect_is_rgba",
    "make_result_filename",
    "save_parameters_txt",
    "zip_results",
]
