"""
Pytest fixtures for textchunker tests.
"""

import pytest

from textchunker import ChunkingOptions, ChunkingServiceConfig


@pytest.fixture
def small_options():
    """Options small enough to force several chunks on short inputs."""
    return ChunkingOptions(chunk_size=60, chunk_overlap=15)


@pytest.fixture
def prose_text():
    """A few paragraphs of English prose with a list and a table."""
    return (
        "Retrieval pipelines depend on good chunks. Each chunk should hold "
        "complete sentences. Overlap keeps context across chunk edges.\n\n"
        "Supported inputs:\n"
        "- plain text documents\n"
        "- CSV exports from spreadsheets\n\n"
        "| Format | Path |\n"
        "| text | prose |\n"
        "| csv | tabular |\n\n"
        "The engine never calls the network. It is a pure transformation."
    )


@pytest.fixture
def arabic_text():
    return "الذكاء الاصطناعي يغير العالم. الذكاء الاصطناعي في التعليم والصحة."


@pytest.fixture
def csv_content():
    """Small product table with a header row."""
    return (
        "id,product_name,price\n"
        "1,Apple,1.50\n"
        "2,Banana,0.25\n"
        "3,Cherry,4.00\n"
        "4,Apple,1.75\n"
    )


@pytest.fixture
def service_config(tmp_path):
    return ChunkingServiceConfig(data_dir=str(tmp_path / "chunking"))
