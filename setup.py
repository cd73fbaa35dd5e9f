from setuptools import find_packages, setup

setup(
    name="ordhash",
    version="0.1",
    packages=find_packages(where="src"),
    package_dir={"": "src"},
    python_requires=">=3.9",
    license="MIT License",
    description="An insertion-ordered hash with default policies and nested access",
    install_requires=[
        "attrs>=22.2.0",
        "typing_extensions>=4.7.0",
    ],
    extras_require={
        "test": ["pytest>=7.0"],
    },
)
