"""
Prospector - qualification and ranking of local business listings
for niche-targeted sales prospecting.
"""

__version__ = "1.0.0"
