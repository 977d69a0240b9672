"""Product creation: command and handler."""

from protean import handle
from protean.fields import Float, Integer, String, Text
from protean.utils.globals import current_domain

from storefront.catalogue.product.product import Product
from storefront.domain import storefront
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


@storefront.command(part_of="Product")
class CreateProduct:
    title: String(max_length=255)
    description: Text()
    price: Float()
    brand: String(max_length=100)
    stock: Integer()
    category: String(max_length=100)
    image_url: String(max_length=500)


@storefront.command_handler(part_of=Product)
class CreateProductHandler:
    @handle(CreateProduct)
    def create_product(self, command):
        product = Product.create(
            title=command.title,
            price=command.price,
            description=command.description,
            brand=command.brand,
            stock=command.stock,
            category=command.category,
            image_url=command.image_url,
        )
        current_domain.repository_for(Product).add(product)
        logger.info("product_created", product_id=str(product.id), title=product.title)
        return str(product.id)
