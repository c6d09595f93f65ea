#!/usr/bin/env python
from setuptools import find_packages, setup

with open("src/psd_rename/version.py") as f:
    version = {}
    exec(f.read(), version)

setup(
    name="psd-rename",
    version=version["__version__"],
    description="Bulk renaming and classification of Photoshop PSD layers",
    python_requires=">=3.9",
    package_dir={"": "src"},
    packages=find_packages("src"),
    install_requires=[
        "attrs>=23.1.0",
        "psd-tools>=1.9.28",
    ],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        "console_scripts": ["psd-rename=psd_rename.__main__:main"],
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "Topic :: Multimedia :: Graphics",
    ],
)
