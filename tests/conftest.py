"""Test configuration and fixtures for the MDI signals generator test suite"""

import io
import sys
import json
import zipfile
import pytest
from pathlib import Path

# Add project root to path for imports
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from mdi_signals.config_manager import GeneratorPaths, GeneratorSettings

# Black 24x24 glyph on a transparent background, like the upstream icons
SQUARE_SVG = """<svg xmlns="http://www.w3.org/2000/svg" viewBox="0 0 24 24">
<path d="M4,4H20V20H4Z" />
</svg>
"""

ICON_FILES = ['account.svg', 'account-box.svg', 'abacus.svg']
ARCHIVE_ROOT = 'MaterialDesign-SVG-7.4.47'


@pytest.fixture
def project_root():
    """Fixture providing path to project root directory"""
    return PROJECT_ROOT


@pytest.fixture
def workspace(tmp_path, monkeypatch):
    """Run the test inside an isolated working directory"""
    monkeypatch.chdir(tmp_path)
    for name in ('CACHE', 'TEMP', 'DIST', 'TEMPLATE', 'LOGS'):
        monkeypatch.delenv(f'MDI_SIGNALS_PATHS_{name}_DIR', raising=False)
    monkeypatch.setenv('MDI_SIGNALS_PROGRESS', 'false')

    template = tmp_path / 'template'
    template.mkdir()
    (template / 'info.json').write_text('{"name": "factorio-mdi-signals"}')
    (template / 'data.lua').write_text('require("groups")\nrequire("signals")\n')
    (template / 'graphics').mkdir()
    (template / 'graphics' / 'group.txt').write_text('static')

    return tmp_path


@pytest.fixture
def paths(workspace):
    """Generator paths inside the workspace"""
    return GeneratorPaths(
        cache_dir=workspace / 'cache',
        temp_dir=workspace / 'temp',
        dist_dir=workspace / 'dist',
        template_dir=workspace / 'template',
    )


@pytest.fixture
def settings():
    """Settings matching the bundled generator.json"""
    return GeneratorSettings(
        repo='https://github.com/Templarian/MaterialDesign-SVG',
        tag='v7.4.47',
        zip_path=[ARCHIVE_ROOT, 'svg'],
        render_size=128,
    )


def build_archive(files=None, root=ARCHIVE_ROOT) -> bytes:
    """Build an in-memory release zip containing svg icons"""
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, 'w') as archive:
        archive.writestr(f'{root}/README.md', '# icons')
        archive.writestr(f'{root}/svg/nested/ignored.svg', SQUARE_SVG)
        for name in (ICON_FILES if files is None else files):
            archive.writestr(f'{root}/svg/{name}', SQUARE_SVG)
    return buffer.getvalue()


@pytest.fixture
def archive_bytes():
    """Release archive contents"""
    return build_archive()


@pytest.fixture
def cached_archive(paths, settings, archive_bytes):
    """Release archive already present in the cache"""
    paths.cache_dir.mkdir(parents=True, exist_ok=True)
    cache_zip = paths.cache_dir / f'{settings.tag}.zip'
    cache_zip.write_bytes(archive_bytes)
    return cache_zip


@pytest.fixture
def svg_file(tmp_path):
    """Single SVG icon on disk"""
    path = tmp_path / 'account-box.svg'
    path.write_text(SQUARE_SVG)
    return path


@pytest.fixture
def settings_file(workspace):
    """generator.json in the working directory"""
    path = workspace / 'generator.json'
    path.write_text(json.dumps({
        'repo': 'https://github.com/Templarian/MaterialDesign-SVG',
        'tag': 'v7.4.47',
        'zipPath': [ARCHIVE_ROOT, 'svg'],
        'render_size': 128,
    }))
    return path


# Pytest hooks for better test organization
def pytest_configure(config):
    """Configure pytest with custom markers"""
    config.addinivalue_line("markers", "unit: Unit tests")
    config.addinivalue_line("markers", "integration: Integration tests")


def pytest_collection_modifyitems(config, items):
    """Add markers based on test file location"""
    for item in items:
        if "unit" in str(item.fspath):
            item.add_marker(pytest.mark.unit)
        elif "integration" in str(item.fspath):
            item.add_marker(pytest.mark.integration)
