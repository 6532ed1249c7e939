"""
storyshape.lexicon - Word lists and sentence scoring.

Lexicon tables, the per-method scoring strategies, and NRC emotion
profiles.
"""

from __future__ import annotations
