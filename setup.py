import os

from setuptools import find_packages, setup

README = os.path.join(os.path.dirname(__file__), "README.md")


def readme() -> str:
    with open(README, encoding="utf-8") as f:
        return f.read()


setup(
    name="graphql_corpus_analysis",
    version="1.0.0",
    description="Schema-aware cross-document analysis of GraphQL operations and fragments",
    long_description=readme(),
    long_description_content_type="text/markdown",
    classifiers=[
        "Development Status :: 4 - Beta",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.12",
        "Topic :: Software Development :: Quality Assurance",
        "Topic :: Software Development :: Testing",
        "Intended Audience :: Developers",
    ],
    keywords="graphql lint static analysis fragments depth unused fields",
    license="MIT",
    packages=find_packages(exclude=["*.tests", "*.tests.*"]),
    python_requires=">=3.11",
    install_requires=[
        "click>=8.0.0",
        "graphql-core>=3.2.0",
        "jinja2>=3.0.0",
        "structlog>=25.1.0",
    ],
    extras_require={
        "dev": [
            "pytest>=7.0.0",
            "pytest-cov>=4.0.0",
            "black>=23.0.0",
            "ruff>=0.1.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "graphql_corpus_analysis=graphql_corpus_analysis.graphql_corpus_analysis:graphql_corpus_analysis",
        ],
    },
    include_package_data=True,
    package_data={
        "graphql_corpus_analysis": ["templates/*.jinja2"],
    },
    zip_safe=False,
)
