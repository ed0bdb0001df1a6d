"""
Setup script for Prisma.

Usage:
    pip install -e .           # Editable install
    pip install -e ".[dev]"    # With dev dependencies

Set PRISMA_NO_PROFILING=1 at runtime to compile the timing markers out.
"""

from setuptools import setup, find_packages


setup(
    name='prisma-graphics',
    version='0.1.0',
    description='Flat-shaded polyhedron rendering: meshes, clipping and a painter\'s-algorithm draw list',
    python_requires='>=3.8',
    package_dir={'': 'src'},
    packages=find_packages('src'),
    install_requires=[
        'numpy',
        'matplotlib',
    ],
    extras_require={
        'dev': [
            'pytest',
        ],
    },
)
