"""
Storyshape - narrative sentiment trajectories.

Scores text with sentiment lexicons and turns the per-sentence scores
into a smoothed emotional arc: sentence splitting → lexicon scoring →
low-pass DCT filtering → rescaling for plotting and comparison.
"""

__version__ = "0.1.0"
