import pytest
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.utils.globals import current_domain
from storefront.catalogue.product.creation import CreateProduct
from storefront.catalogue.product.details import UpdateProductDetails
from storefront.catalogue.product.images import AddProductImage
from storefront.catalogue.product.product import Product
from storefront.catalogue.product.removal import DeleteProduct


class TestCreateProduct:
    def test_product_is_persisted(self):
        product_id = current_domain.process(
            CreateProduct(title="Lamp", price=25.0, stock=3),
            asynchronous=False,
        )
        product = current_domain.repository_for(Product).get(product_id)
        assert product.title == "Lamp"
        assert product.stock == 3

    def test_missing_price_rejected(self):
        with pytest.raises(ValidationError):
            current_domain.process(CreateProduct(title="Lamp"), asynchronous=False)


class TestUpdateProduct:
    def test_update_details(self, make_product):
        product_id = make_product(title="Lamp", price=25.0)
        current_domain.process(
            UpdateProductDetails(product_id=product_id, price=30.0, brand="Lumen"),
            asynchronous=False,
        )
        product = current_domain.repository_for(Product).get(product_id)
        assert product.price == 30.0
        assert product.brand == "Lumen"
        assert product.title == "Lamp"

    def test_unknown_product(self):
        with pytest.raises(ObjectNotFoundError) as exc_info:
            current_domain.process(UpdateProductDetails(product_id="missing", price=1.0), asynchronous=False)
        assert str(exc_info.value) == "Product not found"

    def test_images_append(self, make_product):
        product_id = make_product(image_url="/uploads/a.png")
        current_domain.process(AddProductImage(product_id=product_id, url="/uploads/b.png"), asynchronous=False)

        product = current_domain.repository_for(Product).get(product_id)
        assert sorted(image.url for image in product.images) == ["/uploads/a.png", "/uploads/b.png"]


class TestDeleteProduct:
    def test_product_removed(self, make_product):
        product_id = make_product()
        current_domain.process(DeleteProduct(product_id=product_id), asynchronous=False)

        with pytest.raises(ObjectNotFoundError):
            current_domain.repository_for(Product).get(product_id)

    def test_unknown_product(self):
        with pytest.raises(ObjectNotFoundError):
            current_domain.process(DeleteProduct(product_id="missing"), asynchronous=False)
