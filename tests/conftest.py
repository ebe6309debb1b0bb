"""
Root pytest configuration for helpdesk-client.
"""

from helpdesk_client.config.logging import bootstrap_logging

bootstrap_logging()
