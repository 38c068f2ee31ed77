"""
firemap: interactive maps and charts of satellite wildfire detections
"""

__version__ = "0.1.0"
