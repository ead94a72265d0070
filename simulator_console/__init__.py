"""
Simulator Console - administrative console over the cm-simulator backend.
"""

__version__ = "0.1.0"
