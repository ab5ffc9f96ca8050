"""
Social API - account and session backend for the social feed.
"""
__version__ = "1.0.0"
