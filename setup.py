#!/usr/bin/env python3
"""
MDI Signals Generator Setup Script
Installs the mdi_signals package and the mdi-signals console command
"""

from pathlib import Path
from setuptools import setup, find_packages

ROOT = Path(__file__).parent.resolve()


def read_requirements(name: str):
    """Read a requirements file, skipping comments and blank lines"""
    path = ROOT / name
    if not path.exists():
        return []
    lines = path.read_text(encoding='utf-8').splitlines()
    return [line.strip() for line in lines if line.strip() and not line.startswith('#')]


setup(
    name='mdi-signals',
    version='1.0.0',
    description='Generate Factorio virtual signals from the Material Design Icons set',
    packages=find_packages(include=['mdi_signals', 'mdi_signals.*']),
    python_requires='>=3.9',
    install_requires=read_requirements('requirements.txt'),
    extras_require={
        'test': read_requirements('requirements-dev.txt'),
    },
    entry_points={
        'console_scripts': [
            'mdi-signals=mdi_signals.cli:main',
        ],
    },
)
