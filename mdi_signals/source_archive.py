"""
Source Archive Module

Fetches the tagged icon set archive:
- Flat cache directory keyed by release tag (<cache>/<tag>.zip)
- Streaming download into the temp directory, then copied into the cache
- Zip extraction guarded against members escaping the target directory
"""

import shutil
import zipfile
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

import requests
from tqdm import tqdm

from .errors import SourceArchiveError
from .logger import get_logger
from .utils import ensure_directory, format_size

logger = get_logger(__name__)

CHUNK_SIZE = 64 * 1024


@dataclass
class CachedArchive:
    """Cached archive information"""
    tag: str
    path: Path
    size: int


class SourceArchive:
    """Cache-backed access to the icon set release archive"""

    def __init__(self, cache_dir: Path, temp_dir: Path, timeout: int = 60,
                 offline: bool = False, progress: bool = True,
                 session: Optional[requests.Session] = None):
        self.cache_dir = Path(cache_dir)
        self.temp_dir = Path(temp_dir)
        self.timeout = timeout
        self.offline = offline
        self.progress = progress
        self.session = session or requests.Session()
        # 'cache' or 'download' after acquire()
        self.origin: Optional[str] = None

    @property
    def source_zip_path(self) -> Path:
        return self.temp_dir / 'source.zip'

    @property
    def source_dir(self) -> Path:
        return self.temp_dir / 'source'

    def cache_path(self, tag: str) -> Path:
        path = self.cache_dir / f"{tag}.zip"
        if not tag or path.resolve().parent != self.cache_dir.resolve():
            raise SourceArchiveError(f"Invalid tag for cache: {tag!r}")
        return path

    @staticmethod
    def download_uri(repo: str, tag: str) -> str:
        return f"{repo.rstrip('/')}/archive/refs/tags/{tag}.zip"

    def ensure_cache(self) -> Path:
        if not self.cache_dir.exists():
            logger.info("Creating new Cache")
            ensure_directory(self.cache_dir)
        return self.cache_dir

    def acquire(self, repo: str, tag: str) -> Path:
        """
        Place the archive for tag at <temp>/source.zip

        Cache hits are copied; misses are downloaded into the temp
        directory first and only then copied into the cache.

        Returns:
            Path of the temp copy of the archive
        """
        self.ensure_cache()
        cache_zip = self.cache_path(tag)
        target = self.source_zip_path
        target.parent.mkdir(parents=True, exist_ok=True)

        if cache_zip.exists():
            logger.info(f"Loading from Cache: {cache_zip} -> {target}")
            shutil.copyfile(cache_zip, target)
            self.origin = 'cache'
            return target

        if self.offline:
            raise SourceArchiveError(f"Archive for tag '{tag}' is not cached and offline mode is enabled")

        uri = self.download_uri(repo, tag)
        logger.info(f"Downloading: {uri} -> {target}")
        self._download(uri, target)
        logger.info("Download Complete! Copying to Cache")

        shutil.copyfile(target, cache_zip)
        self.origin = 'download'
        return target

    def _download(self, uri: str, target: Path) -> None:
        try:
            with self.session.get(uri, stream=True, timeout=self.timeout) as response:
                response.raise_for_status()
                total = int(response.headers.get('content-length') or 0)

                with open(target, 'wb') as f, tqdm(
                    total=total or None,
                    unit='B',
                    unit_scale=True,
                    desc=target.name,
                    disable=not self.progress or not total,
                ) as bar:
                    for chunk in response.iter_content(chunk_size=CHUNK_SIZE):
                        if chunk:
                            f.write(chunk)
                            bar.update(len(chunk))
        except requests.RequestException as e:
            if target.exists():
                target.unlink()
            raise SourceArchiveError(f"Download failed for {uri}: {e}") from e

        logger.debug(f"Downloaded {format_size(target.stat().st_size)} from {uri}")

    def extract(self, zip_path: Optional[Path] = None) -> Path:
        """Extract the archive into <temp>/source"""
        zip_path = Path(zip_path or self.source_zip_path)
        destination = self.source_dir
        logger.info(f"Extracting: {zip_path} -> {destination}")

        try:
            with zipfile.ZipFile(zip_path) as archive:
                root = destination.resolve()
                for member in archive.namelist():
                    member_path = (destination / member).resolve()
                    if member_path != root and root not in member_path.parents:
                        raise SourceArchiveError(f"Archive member escapes extraction directory: {member}")
                archive.extractall(destination)
        except zipfile.BadZipFile as e:
            raise SourceArchiveError(f"Invalid archive {zip_path}: {e}") from e

        logger.info("Extract Complete!")
        return destination

    def list_cached(self) -> List[CachedArchive]:
        """List cached archives sorted by tag"""
        if not self.cache_dir.exists():
            return []

        return [
            CachedArchive(tag=path.stem, path=path, size=path.stat().st_size)
            for path in sorted(self.cache_dir.glob('*.zip'))
        ]

    def clear(self, tag: Optional[str] = None) -> int:
        """
        Remove cached archives

        Args:
            tag: Only remove this tag's archive when given

        Returns:
            Number of archives removed
        """
        if tag is not None:
            path = self.cache_path(tag)
            if path.exists():
                path.unlink()
                logger.info(f"Removed cached archive: {path}")
                return 1
            return 0

        removed = 0
        for cached in self.list_cached():
            cached.path.unlink()
            removed += 1
        logger.info(f"Removed {removed} cached archive(s) from {self.cache_dir}")
        return removed
