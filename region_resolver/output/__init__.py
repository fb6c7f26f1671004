"""
Batch output files.
"""

from .output_generator import OutputGenerator

__all__ = ['OutputGenerator']
