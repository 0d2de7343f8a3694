"""Package setup for tz_router."""

from setuptools import setup, find_packages

setup(
    name="tz-router",
    version="1.0.0",
    description="Unattended client for the router web admin panel command protocol",
    packages=find_packages(exclude=["tests", "tests.*"]),
    python_requires=">=3.10",
    install_requires=[
        "requests>=2.31.0",
        "urllib3>=2.0.0",
    ],
    extras_require={
        "ui": [
            "colorlog>=6.8.0",
        ],
        "test": [
            "pytest>=7.4.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "tz-router=tz_router.cli:main",
        ],
    },
)
