"""
nucchart Setup Script
=====================
Interactive Chart of Nuclides
"""

from setuptools import setup, find_packages

with open("README.md", "r", encoding="utf-8") as fh:
    long_description = fh.read()

setup(
    name="nucchart",
    version="1.0.0",
    author="nucchart Team",
    author_email="nucchart@example.com",
    description="Interactive chart of nuclides with yield colouring, decay modes and magic-number lines",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=find_packages(include=["nucchart", "nucchart.*"]),
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Science/Research",
        "Intended Audience :: Education",
        "Topic :: Scientific/Engineering :: Physics",
        "Topic :: Scientific/Engineering :: Visualization",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
    ],
    python_requires=">=3.10",
    install_requires=[
        "numpy>=1.24.0",
        "pandas>=2.0.0",
        "pyarrow>=12.0.0",
        "matplotlib>=3.7.0",
        "pyyaml>=6.0",
    ],
    extras_require={
        "dev": [
            "pytest>=7.4.0",
            "black>=23.0.0",
            "flake8>=6.0.0",
        ],
    },
    keywords="nuclear physics chart-of-nuclides isotopes yields visualization",
)
