"""
Setup configuration for termedit package.
"""

import os
import re

from setuptools import setup, find_packages


def read_version() -> str:
    """Read __version__ from the package without importing it."""

    path = os.path.join(os.path.dirname(os.path.abspath(__file__)), "src", "termedit", "__init__.py")
    with open(path, "r", encoding="utf-8") as f:
        match = re.search(r"^__version__ = \"([^\"]+)\"", f.read(), re.MULTILINE)

    return match.group(1)


setup(
    name="termedit",
    version=read_version(),
    description="Terminal text editor with syntax highlighting and live markup preview",
    packages=find_packages(where="src"),
    package_dir={"": "src"},
    install_requires=[
        "pygments>=2.19.1",
        "windows-curses>=2.4.1; platform_system == 'Windows'",
    ],
    extras_require={
        "test": [
            "pytest>=7.0",
        ],
    },
    python_requires=">=3.8",
    entry_points={
        "console_scripts": [
            "termedit=termedit.__main__:main",
        ],
    },
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Environment :: Console :: Curses",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: Apache Software License",
        "Operating System :: POSIX :: Linux",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.8",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Topic :: Text Editors",
        "Topic :: Utilities",
    ],
)
