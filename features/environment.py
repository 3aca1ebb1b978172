"""
Behave environment configuration for ddns-sync integration tests.

No network is used: provider and ipify traffic is answered by an httpx
MockTransport, and published records come from an in-memory resolver.
"""

import logging
import shutil
import tempfile
from pathlib import Path

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


def before_all(context):
    """Set up test environment before all tests."""
    context.base_dir = Path(__file__).parent.parent
    context.test_data_dir = Path(tempfile.mkdtemp(prefix="ddns_sync_features_"))
    context.provider_base_url = "http://he.test"
    logger.info("Test environment setup complete")


def before_scenario(context, scenario):
    """Set up each test scenario."""
    context.scenario_name = scenario.name
    context.wan_address = None
    context.domains = []
    context.published = {}
    context.provider_body = None
    context.update_requests = []
    context.result = None
    context.config_file = context.test_data_dir / f"{scenario.name.lower().replace(' ', '_')}.yaml"

    logger.info(f"Starting scenario: {scenario.name}")


def after_scenario(context, scenario):
    """Clean up after each test scenario."""
    if context.config_file.exists():
        context.config_file.unlink()
    logger.info(f"Completed scenario: {scenario.name}")


def after_all(context):
    """Clean up test environment after all tests."""
    shutil.rmtree(context.test_data_dir, ignore_errors=True)
    logger.info("Test environment cleanup complete")
