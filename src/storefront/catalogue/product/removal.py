"""Product removal: command and handler.

Orders that reference a removed product keep their snapshot lines; nothing
cascades.
"""

from protean import handle
from protean.fields import Identifier
from protean.utils.globals import current_domain

from storefront.catalogue.product.product import Product
from storefront.domain import storefront
from storefront.shared.lookup import load
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


@storefront.command(part_of="Product")
class DeleteProduct:
    product_id: Identifier(required=True)


@storefront.command_handler(part_of=Product)
class DeleteProductHandler:
    @handle(DeleteProduct)
    def delete_product(self, command):
        repo = current_domain.repository_for(Product)
        product = load(Product, command.product_id)
        repo._dao.delete(product)
        logger.info("product_deleted", product_id=str(command.product_id))
