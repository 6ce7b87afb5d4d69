from setuptools import setup, find_packages

setup(
    name="mismatchTm",
    version="1.0.0",
    description="Melting temperature shifts of single-base mismatches in genomic trinucleotide contexts",
    long_description="Nearest-neighbor prediction of mismatch-induced Tm changes across cation concentrations, restricted to contexts observed in a genome",
    packages=find_packages(where="src"),
    package_dir={"": "src"},
    python_requires=">=3.10",
    install_requires=[
    'biopython>=1.83',
    'numpy>=1.24.4',
    'pandas>=2.0.3',
    'click>=8.1',
    'pyyaml>=6.0',
    ],
    extras_require={
        "test": ["pytest>=7.0"],
    },
    entry_points={
        "console_scripts": [
            "mismatchtm=mismatchtm.cli.main:cli",
        ],
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "Operating System :: OS Independent",
    ],
    )
