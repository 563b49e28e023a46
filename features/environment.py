"""
Behave environment configuration for DNS Records Sync scenarios.
"""

import logging

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


def before_scenario(context, scenario):
    """Set up each test scenario."""
    context.scenario_name = scenario.name
    context.desired = []
    context.current = []
    context.policies = []
    context.filter_settings = {"cidr_ignore": [], "dns_ignore": [], "basedomain_filter": []}
    logger.info(f"Starting scenario: {scenario.name}")


def after_scenario(context, scenario):
    """Clean up after each test scenario."""
    logger.info(f"Completed scenario: {scenario.name}")
