"""Shared test fixtures."""

from pathlib import Path

import pytest

from storyvid.config import Config


def pytest_addoption(parser):
    """Add custom command line options."""
    parser.addoption(
        "--run-llm-tests",
        action="store_true",
        default=False,
        help="Run LLM integration tests (expensive, makes real API calls)",
    )


def pytest_configure(config):
    """Configure custom markers."""
    config.addinivalue_line(
        "markers", "llm_integration: mark test as requiring real LLM calls"
    )


def pytest_collection_modifyitems(config, items):
    """Skip LLM tests unless --run-llm-tests is provided."""
    if not config.getoption("--run-llm-tests", default=False):
        skip_llm = pytest.mark.skip(
            reason="LLM integration tests skipped. Use --run-llm-tests to run."
        )
        for item in items:
            if "llm_integration" in item.keywords:
                item.add_marker(skip_llm)


@pytest.fixture
def test_config() -> Config:
    """Provide a test configuration."""
    return Config()


@pytest.fixture
def mock_config() -> Config:
    """Provide a test configuration with mock providers and instant renders."""
    config = Config()
    config.llm.provider = "mock"
    config.tts.provider = "mock"
    config.render.phase_delay_scale = 0
    return config


@pytest.fixture
def sample_script() -> str:
    """Provide a short explainer script."""
    return (
        "Every team drowns in paperwork. Invoices, contracts and receipts pile up "
        "on every desk. Our app scans each document, files it in the right folder "
        "and reminds you before anything is due. Try it free for thirty days."
    )


@pytest.fixture
def sample_scenes() -> list[dict]:
    """Provide storyboard scenes as the editor sends them."""
    return [
        {
            "id": "scene-1",
            "title": "The Problem",
            "description": "A cluttered desk full of paper.",
            "voiceover": "Every team drowns in paperwork.",
            "duration": 5,
            "layoutType": "scattered",
            "animationType": "fade",
            "illustrations": [{"id": "ill-1", "name": "File", "imageUrl": "https://cdn.example.com/file.png"}],
        },
        {
            "id": "scene-2",
            "title": "The Solution",
            "description": "One app replaces the pile.",
            "voiceover": "Our app keeps everything in one place, sorted and searchable.",
            "duration": 4,
            "layoutType": "centered-large",
            "animationType": "zoom",
            "illustrations": [],
        },
        {
            "id": "scene-3",
            "title": "Call to Action",
            "description": "Logo and download button.",
            "voiceover": "",
            "duration": 3,
            "layoutType": "editorial",
            "animationType": "slide",
        },
    ]


@pytest.fixture
def project_root() -> Path:
    """Return the project root directory."""
    return Path(__file__).parent.parent
