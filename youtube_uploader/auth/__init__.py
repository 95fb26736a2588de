"""
Authentication Package

OAuth 2.0 authentication for the YouTube Data API.
"""

from youtube_uploader.auth.oauth_manager import OAuthManager, run_initial_auth

__all__ = [
    "OAuthManager",
    "run_initial_auth",
]
