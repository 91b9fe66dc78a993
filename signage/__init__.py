"""
Slide storage and index-consistency core for a digital-signage server.
"""

__version__ = "0.1.0"
