"""
CLI Command Modules

Each module contains a logical group of related commands.
"""

from stereocode.cli import classify, reference

__all__ = ['classify', 'reference']
