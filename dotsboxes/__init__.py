"""
Dots and Boxes.

A rules engine for the classic pencil-and-paper game, with computer
opponents, lossless state serialization, and an in-memory room server
for hosting matches.
"""

__version__ = "0.1.0"
