"""
Language-specific code generators.
"""

from .go import GoGenerator, create_go_generator

__all__ = ["GoGenerator", "create_go_generator"]
