"""
Setup script for afbind

Pure-Python package: the ArrayFire shared libraries are not built or
bundled here. Install ArrayFire separately and point ``AF_PATH`` (or
``AFBIND_LIBRARY_PATH``) at it when it is not on the system search path.
"""

from pathlib import Path
from setuptools import setup, find_packages


# Read version from src/afbind/__init__.py
def get_version():
    version_file = Path("src/afbind/__init__.py")
    if version_file.exists():
        for line in version_file.read_text().splitlines():
            if line.startswith("__version__"):
                return line.split("=")[1].strip().strip('"').strip("'")
    return "0.1.0"


# Read long description from README
def get_long_description():
    readme = Path("README.md")
    if readme.exists():
        return readme.read_text(encoding="utf-8")
    return ""


setup(
    name="afbind",
    version=get_version(),
    description="ctypes bindings for the ArrayFire parallel array library",
    long_description=get_long_description(),
    long_description_content_type="text/markdown",
    package_dir={"": "src"},
    packages=find_packages(where="src"),
    python_requires=">=3.8",
    install_requires=[
        "numpy>=1.20",
    ],
    extras_require={
        "test": [
            "pytest>=7.0",
        ],
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "Topic :: Scientific/Engineering",
    ],
    zip_safe=False,  # Loads shared libraries through ctypes
)
