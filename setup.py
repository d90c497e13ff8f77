"""Setup file for the Algolia Search Client package."""

from setuptools import setup, find_packages

setup(
    name="algolia-search-client",
    version="1.6.3",
    packages=find_packages(exclude=["tests", "tests.*"]),
    install_requires=[
        "httpx",
        "click",
        "rich",
        "pydantic>=2",
        "pyyaml",
        "python-dotenv",
    ],
    extras_require={
        "test": [
            "pytest",
        ],
    },
    entry_points={
        "console_scripts": [
            "algolia-search=algolia_search.__main__:main",
        ],
    },
    author="Algolia",
    author_email="support@algolia.com",
    description="Python client for the Algolia hosted search API",
    long_description=open("README.md").read(),
    long_description_content_type="text/markdown",
    url="https://github.com/algolia/algoliasearch-client-python",
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.8",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
    ],
    python_requires=">=3.8",
)
