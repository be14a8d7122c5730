"""
ZIGROUTE Setup Configuration

Named-route URL generation and matching for Python clients.
"""

from setuptools import setup, find_packages
from pathlib import Path

# Read README for long description
readme_file = Path(__file__).parent / "README.md"
long_description = readme_file.read_text(encoding="utf-8") if readme_file.exists() else ""

setup(
    name="zigroute",
    version="0.1.0",

    description="Generate URLs from named Laravel/Ziggy routes and match URLs back to routes",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=find_packages(include=["zigroute", "zigroute.*"]),
    include_package_data=True,
    package_data={
        "zigroute.cli": ["templates/*.j2"],
    },
    install_requires=[
        "click>=8.0.0",
        "questionary>=2.0.0",
        "jinja2>=3.0.0",
        "pydantic>=2.0.0",
    ],
    extras_require={
        "fastapi": ["fastapi>=0.100.0"],
        "flask": ["flask>=2.2.0"],
        "dev": [
            "pytest>=7.0.0",
            "flask>=2.2.0",
            "fastapi>=0.100.0",
            "httpx>=0.24.0",
            "black>=23.0.0",
            "ruff>=0.1.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "zigroute=zigroute.cli.main:cli",
        ],
    },
    python_requires=">=3.9",
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Framework :: FastAPI",
        "Framework :: Flask",
    ],
    keywords="routing url-generation laravel ziggy named-routes",
)
