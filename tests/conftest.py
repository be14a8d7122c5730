"""
Pytest Configuration for ZIGROUTE Tests

Ensures proper import paths for the zigroute package during testing and
provides shared route lists.
"""

import sys
from pathlib import Path

import pytest

# Add the parent directory to sys.path to ensure proper imports
project_root = Path(__file__).parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

from zigroute import api  # noqa: E402
from zigroute.config import RouterConfig  # noqa: E402
from zigroute.core.router import Router  # noqa: E402

BASE_SETTINGS = {
    "baseDomain": "www.example.com",
    "baseProtocol": "https",
    "baseUrl": "https://www.example.com",
    "defaultParameters": [],
}


@pytest.fixture
def blog_routes():
    """A small route list in declaration order."""
    return {
        "posts.index": {"uri": "posts", "methods": ["GET", "HEAD"]},
        "posts.store": {"uri": "posts", "methods": ["POST"]},
        "posts.show": {"uri": "posts/{post}", "methods": ["GET", "HEAD"], "bindings": {"post": "slug"}},
        "pages.show": {"uri": "pages/{page}/{section?}", "methods": ["GET", "HEAD"]},
    }


@pytest.fixture
def blog_config(blog_routes):
    return RouterConfig.model_validate({**BASE_SETTINGS, "routes": blog_routes})


@pytest.fixture
def router(blog_config):
    return Router(blog_config)


@pytest.fixture(autouse=True)
def reset_current_router():
    """Every test starts without a process-wide router."""
    api.reset()
    yield
    api.reset()
