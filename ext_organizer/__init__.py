"""
Extension Organizer

Утилита для раскладки файлов по подкаталогам, названным по расширению (pdf, jpg, ...).
"""

__version__ = "1.0.0"
__author__ = "Extension Organizer Team"
__description__ = "Utility for sorting files into per-extension folders"
