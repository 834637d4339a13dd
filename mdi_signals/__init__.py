"""
MDI Signals Generator

Converts the Material Design Icons release into Factorio virtual signals:
- Release archive download and tag-keyed cache
- SVG rasterization into mipmap strips
- Lua prototype and locale generation
"""

__version__ = "1.0.0"
__all__ = [
    'SignalGenerator',
    'ConfigManager',
    'SourceArchive',
    'IconRasterizer',
]

from .config_manager import ConfigManager
from .pipeline import SignalGenerator
from .rasterizer import IconRasterizer
from .source_archive import SourceArchive
