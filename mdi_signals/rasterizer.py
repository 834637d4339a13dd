"""
Icon Rasterizer

Converts each SVG icon into a horizontal mipmap strip:
render once at high resolution, invert the glyph color, downscale to every
configured size and paste the results left to right on a transparent canvas.
"""

import io
from pathlib import Path
from typing import List, Sequence

import cairosvg
from PIL import Image, ImageOps

from .errors import RasterizeError
from .logger import get_logger

logger = get_logger(__name__)

DEFAULT_SIZES = (64, 32, 16, 8)
DEFAULT_RENDER_SIZE = 1024


def find_svg_files(folder: Path) -> List[Path]:
    """Return the *.svg files directly inside folder, sorted by name"""
    folder = Path(folder)
    if not folder.is_dir():
        raise RasterizeError(f"SVG folder not found: {folder}")
    return sorted(p for p in folder.glob('*.svg') if p.is_file())


def icon_name(svg_file: Path, prefix: str = 'mdi-') -> str:
    """account-box.svg -> mdi-account-box"""
    return prefix + Path(svg_file).name[:-len('.svg')]


def subgroup_name(name: str) -> str:
    """First two dash-separated parts: mdi-account-box -> mdi-account"""
    return '-'.join(name.split('-')[:2])


class IconRasterizer:
    """SVG to PNG strip converter"""

    def __init__(self, sizes: Sequence[int] = DEFAULT_SIZES,
                 render_size: int = DEFAULT_RENDER_SIZE):
        if not sizes:
            raise ValueError("At least one strip size is required")
        self.sizes = list(sizes)
        self.render_size = render_size

    @property
    def strip_size(self) -> tuple:
        return sum(self.sizes), max(self.sizes)

    def render(self, svg_path: Path) -> Image.Image:
        """Rasterize an SVG to a square RGBA master image"""
        try:
            png_bytes = cairosvg.svg2png(
                url=str(svg_path),
                output_width=self.render_size,
                output_height=self.render_size,
            )
        except Exception as e:
            raise RasterizeError(f"Failed to rasterize {Path(svg_path).name}: {e}") from e

        with Image.open(io.BytesIO(png_bytes)) as image:
            master = image.convert('RGBA')

        # Some SVGs carry their own aspect ratio; the strip expects squares
        if master.size != (self.render_size, self.render_size):
            canvas = Image.new('RGBA', (self.render_size, self.render_size), (0, 0, 0, 0))
            canvas.paste(master, (0, 0))
            master = canvas

        return master

    @staticmethod
    def negate(image: Image.Image) -> Image.Image:
        """Invert RGB channels and keep alpha untouched"""
        rgba = image.convert('RGBA')
        red, green, blue, alpha = rgba.split()
        inverted = ImageOps.invert(Image.merge('RGB', (red, green, blue)))
        return Image.merge('RGBA', (*inverted.split(), alpha))

    def build_strip(self, master: Image.Image) -> Image.Image:
        """Resize master to every size and append horizontally, top aligned"""
        strip = Image.new('RGBA', self.strip_size, (0, 0, 0, 0))

        x = 0
        for size in self.sizes:
            resized = master.resize((size, size), Image.Resampling.LANCZOS)
            strip.paste(resized, (x, 0))
            x += size

        return strip

    def convert(self, svg_path: Path, png_path: Path) -> Path:
        """Write the mipmap strip for one SVG icon"""
        master = self.negate(self.render(svg_path))
        strip = self.build_strip(master)

        try:
            strip.save(png_path, format='PNG')
        except OSError as e:
            raise RasterizeError(f"Failed to write {png_path}: {e}") from e

        logger.debug(f"Wrote {strip.size[0]}x{strip.size[1]} strip: {png_path}")
        return Path(png_path)
