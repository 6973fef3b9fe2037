"""
Setup script for ratsweep.

Usage:
    pip install -e .           # Editable install
    pip install -e ".[dev]"    # With dev dependencies
"""

from setuptools import setup, find_packages


setup(
    name='ratsweep',
    version='0.1.0',
    description='Exact rational plane-sweep segment intersection (Bentley-Ottmann, Shamos-Hoey)',
    python_requires='>=3.8',
    packages=find_packages('src'),
    package_dir={'': 'src'},
    install_requires=[
        'numpy',
        'sortedcontainers',
    ],
    extras_require={
        'dev': [
            'pytest',
        ],
    },
)
