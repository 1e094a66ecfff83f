"""
Utility helpers for the question integrity tools.
"""

from interview_integrity.utils.env_loader import load_env

__all__ = [
    "load_env",
]
