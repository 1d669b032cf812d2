"""Setup script for contentcache.

Pure-Python package; no extensions are compiled.

Usage:
    # Install package
    pip install -e .

    # Install with test dependencies
    pip install -e ".[test]"
"""

from pathlib import Path

from setuptools import find_packages, setup

# =============================================================================
# Metadata
# =============================================================================

HERE = Path(__file__).parent

README = HERE / "README.md"
LONG_DESCRIPTION = README.read_text(encoding="utf-8") if README.exists() else ""

INSTALL_REQUIRES = [
    "requests>=2.28",
    "urllib3>=1.26",
    "tqdm>=4.64",
    "typing_extensions>=4.5",
]

EXTRAS_REQUIRE = {
    "test": [
        "pytest>=7.0",
    ],
}


# =============================================================================
# Main Setup
# =============================================================================

if __name__ == "__main__":
    setup(
        name="contentcache",
        version="1.0.0",
        description="Bounded local file cache for stream-only content sources",
        long_description=LONG_DESCRIPTION,
        long_description_content_type="text/markdown",
        python_requires=">=3.10",
        packages=find_packages(include=["contentcache", "contentcache.*"]),
        install_requires=INSTALL_REQUIRES,
        extras_require=EXTRAS_REQUIRE,
    )
