from setuptools import setup, find_packages
from pathlib import Path

# Read README.md if available (for development installs)
# For wheel builds, use a fallback description
readme_path = Path(__file__).parent / "README.md"
if readme_path.exists():
    long_description = readme_path.read_text(encoding="utf-8")
else:
    long_description = "Knowledge-base stores backed by Gemini File Search: upload documents, query them with citations."

setup(
    name="gemini-rag-kb",
    version="1.0.0",
    description="Knowledge-base stores backed by Gemini File Search",
    long_description=long_description,
    long_description_content_type="text/markdown",
    package_dir={"": "src"},
    packages=find_packages(where="src"),
    classifiers=[
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
    ],
    python_requires=">=3.9",
    install_requires=[
        "google-genai>=1.49.0",  # File Search stores API
        "pydantic>=2.0.0",
        "pyyaml>=6.0",
        "fsspec>=2023.1.0",
        "typer>=0.9.0",
    ],
    entry_points={
        "console_scripts": [
            "gemini-rag=gemini_rag.cli:main",
        ],
    },
    extras_require={
        "dev": [
            "pytest",
            "coverage",
        ],
        "storage-s3": ["s3fs"],
        "storage-gcs": ["gcsfs"],
        "storage-azure": ["adlfs"],
        "storage-all": ["s3fs", "gcsfs", "adlfs"],
    },
)
