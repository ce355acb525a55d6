"""Storefront domain — accounts, catalogue, cart, orders and payments.

A single Protean domain so that order placement can decrement product stock,
create the order and clear the cart inside one unit of work.
"""

from protean.domain import Domain

from storefront.utils.logging import configure_logging, get_logger

# Configure logging for the application
configure_logging()

# Get logger for this module
logger = get_logger(__name__)

# Domain Composition Root
storefront = Domain(name="storefront")
