"""
Setup configuration for the Fire Station Cost-Benefit Engine.

This package evaluates proposed fire stations as capital investments: escalated
cash flows, NPV, IRR, payback period, ROI, benefit-cost ratio and Monte Carlo risk.
"""

from setuptools import setup, find_packages

# Read long description from README
try:
    with open("docs/README.md", "r", encoding="utf-8") as fh:
        long_description = fh.read()
except FileNotFoundError:
    long_description = ""

setup(
    name="station_cba",
    version="0.1.0",
    description="Cost-benefit and financial metrics engine for proposed fire stations",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=find_packages(exclude=["tests", "tests.*", "examples", "examples.*"]),
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Science/Research",
        "Topic :: Scientific/Engineering",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
    ],
    python_requires=">=3.10",
    install_requires=[
        "numpy>=1.24.0",
    ],
    extras_require={
        "tables": [
            "pandas>=2.0.0",
        ],
        "dev": [
            "pytest>=7.0.0",
            "pytest-cov>=4.0.0",
            "pandas>=2.0.0",
            "scipy>=1.10.0",
        ],
        "all": [
            "pandas>=2.0.0",
            "pytest>=7.0.0",
            "pytest-cov>=4.0.0",
            "scipy>=1.10.0",
        ],
    },
    include_package_data=True,
    zip_safe=False,
)
