"""
Setup script for geomeasures package
Dimension, area, length and distance of vector geometries with CRS-aware units
"""
from setuptools import setup, find_packages
from pathlib import Path

# Read README for long description
readme_file = Path(__file__).parent / "README.md"
long_description = readme_file.read_text(encoding="utf-8") if readme_file.exists() else ""

setup(
    name="geomeasures",
    version="0.1.0",
    description="Planar, spherical and geodesic measurements of vector geometries with CRS-aware units",
    long_description=long_description,
    long_description_content_type="text/markdown",
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Science/Research",
        "Topic :: Scientific/Engineering :: GIS",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Operating System :: OS Independent",
    ],
    package_dir={"": "src"},
    packages=find_packages(where="src"),
    python_requires=">=3.10",
    install_requires=[
        # Core scientific stack
        "numpy>=1.21",
        "pandas>=1.3",
        # Geospatial
        "geopandas>=0.12",
        "shapely>=2.0,<3.0",
        "pyproj>=3.3,<4.0",
    ],
    extras_require={
        "geodesic": [
            # Ellipsoidal backend (Karney geodesics)
            "geographiclib>=2.0",
        ],
        "dev": [
            "black>=22.0",
            "isort>=5.0",
            "pytest>=7.0",
            "pytest-cov>=3.0",
            "geographiclib>=2.0",
        ],
    },
    include_package_data=True,
    zip_safe=False,
)
