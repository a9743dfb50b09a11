"""eep - a small modal terminal text editor."""

from .buffer import LineBuffer
from .editor import Editor
from .model import CursorPosition, TextModel
from .modes import EditorMode
from .view import Viewport

__all__ = [
    'Editor',
    'EditorMode',
    'LineBuffer',
    'TextModel',
    'CursorPosition',
    'Viewport',
]
