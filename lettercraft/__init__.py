"""
LetterCraft - template-driven letter generation with version history and PDF export.
"""

__version__ = "0.1.0"
