"""Package setup for SEO Starter Kit."""

from setuptools import setup, find_packages

with open("README.md", "r", encoding="utf-8") as fh:
    long_description = fh.read()

with open("requirements.txt", "r", encoding="utf-8") as fh:
    requirements = [
        line.strip()
        for line in fh
        if line.strip() and not line.startswith("#")
    ]

# Separate test dependencies
test_requirements = [r for r in requirements if "pytest" in r]

setup(
    name="seo-starter-kit",
    version="1.0.0",
    author="PipeFix Web Team",
    author_email="web@pipefix.co.uk",
    description=(
        "SEO starter kit: merge site and page SEO records, build Schema.org "
        "JSON-LD, and validate page content before publishing."
    ),
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=find_packages(include=["seo_starter", "seo_starter.*"]),
    python_requires=">=3.10",
    install_requires=[r for r in requirements if "pytest" not in r],
    extras_require={
        "test": test_requirements,
        "dev": test_requirements + [
            "black",
            "flake8",
            "isort",
            "mypy",
        ],
    },
    entry_points={
        "console_scripts": [
            "seo-kit=seo_starter.cli:main",
        ],
    },
    include_package_data=True,
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "Topic :: Internet :: WWW/HTTP :: Indexing/Search",
        "Topic :: Internet :: WWW/HTTP :: Site Management",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Programming Language :: Python :: 3.13",
        "Framework :: Pytest",
    ],
    keywords=[
        "seo", "schema.org", "json-ld", "open-graph", "metadata",
        "structured-data", "content-validation", "static-site",
    ],
)
