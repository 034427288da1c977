"""
hls-mirror: mirror an HLS playlist and all of its segments to a local directory.
"""

__version__ = "1.0.0"
