# practice_mocktest/__init__.py
"""
Practice Mock Test - topic-wise MCQ test engine
Question selection, timed test sessions and scored results over MongoDB
"""

__version__ = "1.0.0"
__description__ = "Topic-wise MCQ practice tests with timed sessions and scored analytics"

from .core.config import config
from .main import app

__all__ = ["app", "config"]
