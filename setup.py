"""
Setup configuration for Scrivener, the annotation-driven code synthesis engine.
"""

from setuptools import setup, find_packages
import os


# Read version from package
def get_version():
    """Extract version from package __init__.py"""
    version_file = os.path.join(os.path.dirname(__file__), "scrivener", "__init__.py")
    with open(version_file, "r") as f:
        for line in f:
            if line.startswith("__version__"):
                return line.split("=")[1].strip().strip("\"'")
    return "0.1.0"


# Read long description from README
def get_long_description():
    """Read long description from README.md if available"""
    readme_path = os.path.join(os.path.dirname(__file__), "README.md")
    if os.path.exists(readme_path):
        with open(readme_path, "r", encoding="utf-8") as f:
            return f.read()
    return "Scrivener: annotation-driven source code synthesis"


setup(
    name="scrivener",
    version=get_version(),
    author="Scrivener Team",
    author_email="scrivener@example.com",
    description="Annotation-driven source code synthesis engine",
    long_description=get_long_description(),
    long_description_content_type="text/markdown",
    url="https://github.com/scrivener/scrivener",
    packages=find_packages(exclude=["tests*", "examples*", "docs*"]),
    package_data={
        "scrivener.codegen.templates": ["go/*.j2"],
    },
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.8",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Topic :: Software Development :: Code Generators",
        "Topic :: Software Development :: Libraries :: Python Modules",
    ],
    python_requires=">=3.8",
    install_requires=[
        "jinja2>=3.0",
        "pyyaml>=5.4",
    ],
    extras_require={
        "dev": [
            "pytest>=6.0",
            "pytest-cov>=2.0",
            "black>=22.0",
            "isort>=5.0",
            "mypy>=0.900",
            "flake8>=4.0",
            "pre-commit>=2.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "scrivener-info=scrivener.utils.info:main",
        ],
    },
    include_package_data=True,
    zip_safe=False,
    keywords="code-generation, templates, annotations, jinja2",
)
