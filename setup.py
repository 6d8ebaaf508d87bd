# setup.py
from setuptools import setup, find_packages

setup(
    name="avsfld",
    version="0.1.0",
    package_dir={"": "src"},
    packages=find_packages(where="src"),
    python_requires=">=3.10",
    install_requires=[
        "numpy",
        "xarray",
        "loguru",
    ],
    extras_require={
        "test": ["pytest"],
    },
)
