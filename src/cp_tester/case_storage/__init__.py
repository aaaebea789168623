"""Case store exports."""

from .case_folder_scanner import io_modes_from_names, load_test_from_folder, scan_case_folder
from .case_models import IOMode, IORouting, StoredCase, StoredTest, sort_case_names

__all__ = [
    "IOMode",
    "IORouting",
    "StoredCase",
    "StoredTest",
    "sort_case_names",
    "scan_case_folder",
    "load_test_from_folder",
    "io_modes_from_names",
]
