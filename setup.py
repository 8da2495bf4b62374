# setup.py
from setuptools import setup, find_packages

setup(
    name="tree2fs",
    version="1.0.0",
    description="Create directory and file structures from tree diagrams",
    package_dir={"": "src"},
    packages=find_packages(where="src"),
    python_requires=">=3.9",
    install_requires=[],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        'console_scripts': [
            'tree2fs=tree2fs.main:main',
        ],
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "Operating System :: OS Independent",
    ],
)
