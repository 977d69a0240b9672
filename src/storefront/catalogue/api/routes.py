"""FastAPI routes for the Catalogue context: products and brands."""

from fastapi import APIRouter, Depends, Request
from fastapi.exceptions import RequestValidationError
from protean.utils.globals import current_domain
from pydantic import ValidationError as PydanticValidationError
from starlette.datastructures import UploadFile

from storefront.api.auth import admin
from storefront.api.schemas import MessageResponse
from storefront.catalogue.api.schemas import (
    BrandResponse,
    CreateBrandRequest,
    ProductPayload,
    ProductResponse,
    UpdateBrandRequest,
)
from storefront.catalogue.api.uploads import read_image, store_image
from storefront.catalogue.brand.brand import Brand
from storefront.catalogue.brand.management import CreateBrand, DeleteBrand, UpdateBrand
from storefront.catalogue.product.creation import CreateProduct
from storefront.catalogue.product.details import UpdateProductDetails
from storefront.catalogue.product.images import AddProductImage
from storefront.catalogue.product.product import Product
from storefront.catalogue.product.removal import DeleteProduct
from storefront.shared.lookup import load

product_router = APIRouter(prefix="/products", tags=["products"])
brand_router = APIRouter(prefix="/brands", tags=["brands"])


async def read_product_payload(request: Request) -> tuple[ProductPayload, UploadFile | None]:
    """Accept product fields either as multipart form data (with an optional ``image`` file) or as JSON."""
    upload = None
    content_type = request.headers.get("content-type", "")
    if content_type.startswith("multipart/form-data") or content_type.startswith(
        "application/x-www-form-urlencoded"
    ):
        form = await request.form()
        raw = {}
        for key, value in form.multi_items():
            if isinstance(value, UploadFile):
                if key == "image" and value.filename:
                    upload = value
            elif value != "":
                raw[key] = value
    else:
        body = await request.body()
        raw = await request.json() if body else {}
        if not isinstance(raw, dict):
            raise RequestValidationError([{"loc": ("body",), "msg": "Expected a JSON object", "type": "dict_type"}])

    try:
        payload = ProductPayload.model_validate(raw)
    except PydanticValidationError as exc:
        raise RequestValidationError(exc.errors()) from None
    return payload, upload


# --- Product endpoints ---


@product_router.post("", status_code=201, response_model=ProductResponse, dependencies=[Depends(admin)])
async def create_product(request: Request) -> ProductResponse:
    payload, upload = await read_product_payload(request)
    image = await read_image(upload) if upload else None
    command = CreateProduct(
        title=payload.title,
        description=payload.description,
        price=payload.price,
        brand=payload.brand,
        stock=payload.stock,
        category=payload.category,
    )
    product_id = current_domain.process(command, asynchronous=False)

    # Written only once the product exists, so rejected requests leave no files behind
    if image is not None:
        url = store_image(upload.filename, image)
        current_domain.process(AddProductImage(product_id=product_id, url=url), asynchronous=False)
    return ProductResponse.from_product(load(Product, product_id))


@product_router.get("", response_model=list[ProductResponse])
async def list_products() -> list[ProductResponse]:
    products = current_domain.repository_for(Product)._dao.query.order_by("-created_at").all().items
    return [ProductResponse.from_product(product) for product in products]


@product_router.get("/{product_id}", response_model=ProductResponse)
async def get_product(product_id: str) -> ProductResponse:
    return ProductResponse.from_product(load(Product, product_id))


@product_router.put("/{product_id}", response_model=ProductResponse, dependencies=[Depends(admin)])
async def update_product(product_id: str, request: Request) -> ProductResponse:
    payload, upload = await read_product_payload(request)
    image = await read_image(upload) if upload else None
    command = UpdateProductDetails(
        product_id=product_id,
        title=payload.title,
        description=payload.description,
        price=payload.price,
        brand=payload.brand,
        stock=payload.stock,
        category=payload.category,
    )
    current_domain.process(command, asynchronous=False)

    if image is not None:
        url = store_image(upload.filename, image)
        current_domain.process(AddProductImage(product_id=product_id, url=url), asynchronous=False)
    return ProductResponse.from_product(load(Product, product_id))


@product_router.delete("/{product_id}", response_model=MessageResponse, dependencies=[Depends(admin)])
async def delete_product(product_id: str) -> MessageResponse:
    current_domain.process(DeleteProduct(product_id=product_id), asynchronous=False)
    return MessageResponse(message="Product deleted")


# --- Brand endpoints ---


@brand_router.get("", response_model=list[BrandResponse])
async def list_brands() -> list[BrandResponse]:
    brands = current_domain.repository_for(Brand).list_active()
    return [BrandResponse.from_brand(brand) for brand in brands]


@brand_router.get("/slug/{slug}", response_model=BrandResponse)
async def get_brand_by_slug(slug: str) -> BrandResponse:
    return BrandResponse.from_brand(current_domain.repository_for(Brand).get_active_by_slug(slug))


@brand_router.get("/{brand_id}", response_model=BrandResponse)
async def get_brand(brand_id: str) -> BrandResponse:
    return BrandResponse.from_brand(load(Brand, brand_id))


@brand_router.post("", status_code=201, response_model=BrandResponse, dependencies=[Depends(admin)])
async def create_brand(body: CreateBrandRequest) -> BrandResponse:
    command = CreateBrand(
        name=body.name,
        description=body.description,
        logo=body.logo,
        is_active=body.is_active,
    )
    brand_id = current_domain.process(command, asynchronous=False)
    return BrandResponse.from_brand(load(Brand, brand_id))


@brand_router.put("/{brand_id}", response_model=BrandResponse, dependencies=[Depends(admin)])
async def update_brand(brand_id: str, body: UpdateBrandRequest) -> BrandResponse:
    command = UpdateBrand(
        brand_id=brand_id,
        name=body.name,
        description=body.description,
        logo=body.logo,
        is_active=body.is_active,
    )
    current_domain.process(command, asynchronous=False)
    return BrandResponse.from_brand(load(Brand, brand_id))


@brand_router.delete("/{brand_id}", response_model=MessageResponse, dependencies=[Depends(admin)])
async def delete_brand(brand_id: str) -> MessageResponse:
    current_domain.process(DeleteBrand(brand_id=brand_id), asynchronous=False)
    return MessageResponse(message="Brand deleted successfully")
