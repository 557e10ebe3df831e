from setuptools import setup, find_namespace_packages

setup(
    name="c2i",
    version="0.1.0",
    packages=find_namespace_packages(where="src", include=["c2i", "c2i.*"]),
    package_dir={"": "src"},
    install_requires=[
        "pydantic>=2.0",
        "pydantic-core",
        "pyyaml>=6.0",
        "click>=8.0",
        "python-dotenv>=1.0",
        "semver>=3.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "c2i=c2i.CLI.main:main",
        ],
    },
)
