"""Sector-level volume access, export, a one-file filesystem view, unlock-method selection and BEK file reading."""

__version__ = "0.1.0"

__all__ = [
    "accesses",
    "bekfile",
    "common",
    "export",
    "fsops",
    "volume",
]