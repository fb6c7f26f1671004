"""
Setup script for the Region Resolver application.
"""

from setuptools import setup, find_packages

with open("requirements.txt", "r", encoding="utf-8") as fh:
    requirements = [line.strip() for line in fh if line.strip() and not line.startswith("#")]

# Separate development requirements
dev_requirements = [req for req in requirements if any(dev in req for dev in ["pytest", "black", "flake8"])]
install_requirements = [req for req in requirements if req not in dev_requirements]

setup(
    name="region-resolver",
    version="1.0.0",
    author="Data Analytics Team",
    description="Resolve blood request locations to Bangladesh divisions, districts and upazilas",
    long_description="Region Resolver - maps coordinates and free-text address hints onto the "
                     "division, district and upazila hierarchy, and publishes chat and notification "
                     "events to per-user realtime channels.",
    packages=find_packages(exclude=["tests", "tests.*"]),
    py_modules=["main"],
    package_data={"region_resolver": ["data/*.csv"]},
    include_package_data=True,
    install_requires=install_requirements,
    extras_require={
        "dev": dev_requirements,
    },
    python_requires=">=3.8",
    entry_points={
        "console_scripts": [
            "region-resolver=main:main",
        ],
    },
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.8",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
    ],
)
