from pathlib import Path

from setuptools import find_packages, setup

readme_file = Path(__file__).parent / "README.md"
long_description = readme_file.read_text(encoding='utf-8') if readme_file.exists() else ""

version = {}
version_file = Path(__file__).parent / "Linewalk" / "__init__.py"
with open(version_file) as f:
    for line in f:
        if line.startswith("__version__"):
            exec(line, version)
            break

setup(
    name="linewalk",
    version=version.get("__version__", "0.1.0"),
    description="Bidirectional, end-of-line aware line navigation and record reading for seekable files",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=find_packages(exclude=["test", "tests", "tests.*", "examples"]),
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Developers",
        "Topic :: Text Processing",
        "Topic :: Software Development :: Libraries",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
    ],
    python_requires=">=3.9",
    install_requires=[
        "typer>=0.9.0",
        "rich>=13.0.0",
    ],
    extras_require={
        "dev": [
            "pytest>=8.0.0",
            "pytest-cov>=4.0.0",
            "ruff>=0.6.0",
            "mypy>=1.0.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "linewalk=Linewalk.cli:main",
        ],
    },
    include_package_data=True,
)
