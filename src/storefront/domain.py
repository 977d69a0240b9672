"""Domain initialization and configuration."""

from importlib import import_module

from protean.domain import Domain

from storefront.utils.logging import configure_logging, get_logger

# Configure logging for the application
configure_logging(log_dir="logs", log_file_prefix="storefront")

# Get logger for this module
logger = get_logger(__name__)

# Domain Composition Root
storefront = Domain(name="storefront")

# Domain.init() only traverses this folder and its direct subfolders. Elements
# live one level deeper (``<context>/<aggregate>/<module>.py``), so they are
# imported here before initialization.
ELEMENT_MODULES = (
    "storefront.catalogue.product.product",
    "storefront.catalogue.product.events",
    "storefront.catalogue.product.creation",
    "storefront.catalogue.product.details",
    "storefront.catalogue.product.images",
    "storefront.catalogue.product.removal",
    "storefront.catalogue.brand.brand",
    "storefront.catalogue.brand.events",
    "storefront.catalogue.brand.management",
    "storefront.catalogue.brand.repository",
    "storefront.identity.user.user",
    "storefront.identity.user.events",
    "storefront.identity.user.registration",
    "storefront.identity.user.profile",
    "storefront.identity.user.removal",
    "storefront.identity.user.roles",
    "storefront.ordering.order.order",
    "storefront.ordering.order.events",
    "storefront.ordering.order.creation",
    "storefront.ordering.order.checkout",
    "storefront.ordering.order.status",
    "storefront.ordering.order.repository",
)


def init_storefront() -> Domain:
    """Register every element module with the domain, then initialize it."""
    for module_name in ELEMENT_MODULES:
        import_module(module_name)
    storefront.init()
    logger.info("domain_initialized", domain=storefront.name, modules=len(ELEMENT_MODULES))
    return storefront
