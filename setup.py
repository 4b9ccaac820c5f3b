import setuptools

with open("README.md", "r", encoding="utf-8") as fh:
    long_description = fh.read()

setuptools.setup(
    name="vscan",
    version="0.1.0",
    author="team-504",
    author_email="example@gmail.com",
    description="Plugin discovery and loading for the vscan vulnerability scanner",
    long_description=long_description,
    long_description_content_type="text/markdown",
    classifiers=[
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
    ],
    packages=setuptools.find_namespace_packages(include=["vscan", "vscan.*"]),
    python_requires=">=3.9",
    install_requires=[
        "beautifulsoup4>=4.11",
        "click>=8.0",
        "rich>=12.0",
    ],
    extras_require={
        "test": ["pytest>=7.0"],
    },
    entry_points={
        "console_scripts": [
            "vscan=vscan.vscanner.cli.runner:cli",
        ],
    },
)
