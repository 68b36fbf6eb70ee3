from .hex_diff import HexDiff
from .scene_validator import validate_scene

__all__ = ['HexDiff', 'validate_scene']
