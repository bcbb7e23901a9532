"""
Command-line interface for the process connection exporter.
"""

from .main import main_cli

__all__ = ["main_cli"]
