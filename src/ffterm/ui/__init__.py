"""
UI Module - Terminal helpers over rich

- Styled output, boxes, banners and tables
- Interactive prompts
- Spinners and progress bars
"""

from .terminal import Terminal
from .prompts import InteractivePrompt
from .displays import ProgressBar

__all__ = [
    "Terminal",
    "InteractivePrompt",
    "ProgressBar",
]
