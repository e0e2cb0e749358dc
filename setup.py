"""
Setup script for the Mjolnir configuration package.
"""

from setuptools import setup, find_packages

setup(
    name="mjolnir-config",
    version="1.0.0",
    description="Configuration loading for the Mjolnir Matrix moderation service",
    author="Mjolnir Team",
    packages=find_packages(include=["mjolnir", "mjolnir.*"]),
    python_requires=">=3.8",
    install_requires=[
        # Core dependencies
        "python-dotenv>=1.0.0",
        "PyYAML>=6.0",
    ],
    extras_require={
        "dev": [
            "pytest>=7.4.0",
            "pytest-cov>=4.1.0",
            "black>=23.0.0",
            "flake8>=6.0.0",
        ],
    },
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: System Administrators",
        "License :: OSI Approved :: Apache Software License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.8",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
    ],
)
