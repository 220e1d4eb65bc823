# setup.py
from setuptools import setup, find_packages

setup(
    name="quickmesh",
    version="1.0.0",
    description="Wavefront OBJ/MTL loader producing render-ready mesh buffers",
    packages=find_packages(include=["quickmesh", "quickmesh.*"]),
    python_requires=">=3.9",
    install_requires=[
        "numpy>=1.20.0",
    ],
    extras_require={
        "test": ["pytest>=7.0"],
    },
    entry_points={
        "console_scripts": ["quickmesh=quickmesh.__main__:_main"],
    },
)
