"""Product detail updates: command and handler."""

from protean import handle
from protean.fields import Float, Identifier, Integer, String, Text
from protean.utils.globals import current_domain

from storefront.catalogue.product.product import Product
from storefront.domain import storefront
from storefront.shared.lookup import load


@storefront.command(part_of="Product")
class UpdateProductDetails:
    product_id: Identifier(required=True)
    title: String(max_length=255)
    description: Text()
    price: Float()
    brand: String(max_length=100)
    stock: Integer()
    category: String(max_length=100)


@storefront.command_handler(part_of=Product)
class UpdateProductDetailsHandler:
    @handle(UpdateProductDetails)
    def update_product_details(self, command):
        repo = current_domain.repository_for(Product)
        product = load(Product, command.product_id)
        product.update_details(
            title=command.title,
            description=command.description,
            price=command.price,
            brand=command.brand,
            stock=command.stock,
            category=command.category,
        )
        repo.add(product)
