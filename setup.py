"""Setup script for QuantFolio."""

from setuptools import setup, find_packages

# Read long description from README
with open("README.md", "r", encoding="utf-8") as fh:
    long_description = fh.read()

# Read requirements
with open("requirements.txt", "r", encoding="utf-8") as fh:
    requirements = [line.strip() for line in fh if line.strip() and not line.startswith("#")]

setup(
    name="quantfolio",
    version="0.1.0",
    author="QuantFolio Team",
    author_email="team@quantfolio.io",
    description="Quantum-inspired Sharpe ratio portfolio optimization",
    long_description=long_description,
    long_description_content_type="text/markdown",
    url="https://github.com/quantfolio/quantfolio",
    packages=find_packages(where=".", include=["quantfolio", "quantfolio.*"]),
    package_dir={"": "."},
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Financial and Insurance Industry",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Topic :: Office/Business :: Financial :: Investment",
    ],
    python_requires=">=3.9",
    install_requires=requirements,
    extras_require={
        "dev": ["pytest>=7.4.4", "httpx>=0.24.0", "black>=23.12.1", "mypy>=1.8.0"],
    },
)
