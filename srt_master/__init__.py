"""
SRT Master - Batch Subtitle Translation Tool

Translates subtitle files in batches with a remote text-generation model,
running a context check before each translation and routing every batch
to either a fast or a high-quality model tier.
"""

__version__ = "1.0.0"
__author__ = "SRT Master Contributors"
