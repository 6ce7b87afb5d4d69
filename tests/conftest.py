"""
Test configuration and fixtures.
"""

import pytest
from pathlib import Path
import tempfile
import shutil


@pytest.fixture
def temp_dir():
    """Create a temporary directory for test outputs."""
    tmpdir = tempfile.mkdtemp()
    yield Path(tmpdir)
    shutil.rmtree(tmpdir)


@pytest.fixture
def sample_fasta(temp_dir):
    """Two-record genome FASTA with wrapped lines."""
    fasta_path = temp_dir / "genome.fa"
    fasta_path.write_text(
        ">chr1\n"
        "ATCGATCGATCGGCTAGCTAAAGGCCTTAACGTTGCA\n"
        "ATCGATCGATCGGCTAGCTAAAGGCCTTAACGTTGCA\n"
        ">chr2\n"
        "GCTAGCTAGCTAGCTAGCTACCGGTTAAGGCCAATT\n"
    )
    return fasta_path


@pytest.fixture
def poly_a_fasta(temp_dir):
    """Single record where only 'aaa' contexts occur."""
    fasta_path = temp_dir / "poly_a.fa"
    fasta_path.write_text(">polyA\nAAAAAA\n")
    return fasta_path


@pytest.fixture
def tiny_fasta(temp_dir):
    """Single 10-base record."""
    fasta_path = temp_dir / "tiny.fa"
    fasta_path.write_text(">tiny\nACGTTGCAAC\n")
    return fasta_path
