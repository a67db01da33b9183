# setup.py
from setuptools import setup, find_namespace_packages

setup(
    name="icounter",
    version="0.1.0",
    description="Count inodes (files and directories) in a directory structure",
    package_dir={"": "src"},
    packages=find_namespace_packages(where="src", include=["icounter", "icounter.*"]),
    python_requires=">=3.9",
    install_requires=[
        "rich>=13.0",
    ],
    extras_require={
        "test": ["pytest>=7.0"],
    },
    entry_points={
        'console_scripts': [
            'icounter=icounter.main:main',
        ],
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "Operating System :: OS Independent",
    ],
)
