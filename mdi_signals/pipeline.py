"""
Signal Generation Pipeline

Runs the whole conversion in one linear pass:
temp/dist setup, archive acquisition, extraction, rasterization,
Lua and locale generation, then temp cleanup.
"""

import json
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional

from .config_manager import GeneratorPaths, GeneratorSettings
from .env import env
from .generators import IconEntry, render_groups, render_locale, render_signals, write_text
from .logger import get_logger
from .rasterizer import IconRasterizer, find_svg_files, icon_name, subgroup_name
from .source_archive import SourceArchive
from .utils import copy_tree, remove_directory, reset_directory

logger = get_logger(__name__)


@dataclass
class GenerationResult:
    """Outcome of one pipeline run"""
    tag: str
    icons: List[IconEntry] = field(default_factory=list)
    subgroups: List[str] = field(default_factory=list)
    origin: Optional[str] = None
    start_time: datetime = field(default_factory=datetime.now)
    end_time: Optional[datetime] = None
    error: Optional[str] = None

    @property
    def success(self) -> bool:
        return self.error is None

    @property
    def duration(self) -> float:
        if self.end_time is None:
            return 0.0
        return (self.end_time - self.start_time).total_seconds()

    def to_dict(self) -> Dict[str, Any]:
        return {
            'tag': self.tag,
            'success': self.success,
            'error': self.error,
            'source': self.origin,
            'start_time': self.start_time.isoformat(),
            'end_time': self.end_time.isoformat() if self.end_time else None,
            'duration_seconds': self.duration,
            'summary': {
                'icons': len(self.icons),
                'subgroups': len(self.subgroups),
            },
            'subgroups': self.subgroups,
        }


class SignalGenerator:
    """Builds the mod's dist tree from a tagged icon set release"""

    def __init__(self, settings: GeneratorSettings, paths: Optional[GeneratorPaths] = None,
                 archive: Optional[SourceArchive] = None, offline: bool = False):
        self.settings = settings
        self.paths = paths or GeneratorPaths.from_env()
        self.archive = archive or SourceArchive(
            self.paths.cache_dir,
            self.paths.temp_dir,
            timeout=env.http_timeout,
            offline=offline,
            progress=env.progress_enabled,
        )
        self.rasterizer = IconRasterizer(settings.sizes, settings.render_size)

    @property
    def signal_dir(self) -> Path:
        return self.paths.dist_dir / 'graphics' / 'signal'

    @property
    def locale_dir(self) -> Path:
        return self.paths.dist_dir / 'locale' / self.settings.locale

    def run(self) -> GenerationResult:
        """Run every step; any failure is logged and reported in the result"""
        result = GenerationResult(tag=self.settings.tag)
        temp_created = False

        try:
            reset_directory(self.paths.temp_dir)
            temp_created = True
            logger.info(f"Created Temporary Directory: {self.paths.temp_dir}")

            self.prepare_dist()

            zip_path = self.archive.acquire(self.settings.repo, self.settings.tag)
            result.origin = self.archive.origin
            source_dir = self.archive.extract(zip_path)

            entries = self.rasterize(source_dir)
            result.icons = entries
            result.subgroups = sorted({entry.subgroup for entry in entries})

            self.write_outputs(entries)
        except Exception as e:
            logger.exception(f"Generation failed: {e}")
            result.error = str(e) or e.__class__.__name__
        finally:
            if temp_created and remove_directory(self.paths.temp_dir):
                logger.info(f"Deleted Temporary Directory: {self.paths.temp_dir}")
            result.end_time = datetime.now()

        return result

    def prepare_dist(self) -> Path:
        """Recreate dist and seed it with the static template tree"""
        dist = reset_directory(self.paths.dist_dir)
        copied = copy_tree(self.paths.template_dir, dist)
        logger.debug(f"Copied {len(copied)} template file(s) into {dist}")
        return dist

    def svg_folder(self, source_dir: Path) -> Path:
        return Path(source_dir).joinpath(*self.settings.zip_path)

    def rasterize(self, source_dir: Path) -> List[IconEntry]:
        """Convert every SVG in the configured archive folder"""
        svg_files = find_svg_files(self.svg_folder(source_dir))
        self.signal_dir.mkdir(parents=True, exist_ok=True)
        self.locale_dir.mkdir(parents=True, exist_ok=True)

        logger.info(f"Converting {len(svg_files)} SVG Files")

        entries = []
        for svg_file in svg_files:
            name = icon_name(svg_file, self.settings.icon_prefix)
            subgroup = subgroup_name(name)
            png_path = self.signal_dir / f"{name}.png"
            logger.info(f"Converting: [{subgroup}] {svg_file.name} -> {png_path}")

            self.rasterizer.convert(svg_file, png_path)
            entries.append(IconEntry(icon_name=name, subgroup=subgroup))

        return entries

    def write_outputs(self, entries: List[IconEntry]) -> None:
        """Write signals.lua, the locale file and groups.lua"""
        settings = self.settings

        write_text(
            self.paths.dist_dir / 'signals.lua',
            render_signals(entries, settings.mod_name, settings.signal_prefix),
        )
        write_text(
            self.locale_dir / 'mdi_signals.cfg',
            render_locale(entries, settings.group_name, settings.group_title, settings.signal_prefix),
        )
        write_text(
            self.paths.dist_dir / 'groups.lua',
            render_groups((entry.subgroup for entry in entries), settings.group_name),
        )


def write_report(result: GenerationResult, report_path: Path) -> Path:
    """Save a JSON generation report"""
    report_path = Path(report_path)
    report_path.parent.mkdir(parents=True, exist_ok=True)
    with open(report_path, 'w', encoding='utf-8') as f:
        json.dump(result.to_dict(), f, indent=2, ensure_ascii=False)
    return report_path
