from setuptools import setup, find_packages

setup(
    name="karaoke-search",
    version="0.1.0",
    description="Find TJ/KY karaoke song numbers and lyrics pages for a song title, across Korean and Japanese sources",
    long_description=open("README.md", encoding="utf-8").read(),
    long_description_content_type="text/markdown",
    python_requires=">=3.10",
    license="MIT",
    packages=find_packages(exclude=["tests", "tests.*"]),
    package_data={"karaoke_search": ["py.typed"]},
    install_requires=[
        "beautifulsoup4",
        "colorama>=0.4.6",
        "regex",
        "requests",
        "typer",
    ],
    extras_require={
        "dev": [
            "pytest",
            "black",
            "ruff",
            "mypy",
        ]
    },
    entry_points={
        "console_scripts": [
            "karaoke-search=karaoke_search.cli:main",
        ]
    },
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: End Users/Desktop",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Topic :: Multimedia :: Sound/Audio",
        "Topic :: Utilities",
    ],
    keywords="karaoke tj ky lyrics vocaloid korean japanese search",
)
