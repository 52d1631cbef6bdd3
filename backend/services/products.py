"""Products service — /products."""

from catalog.models import Product, ProductDraft
from services.base import EntityKind, EntityService, register_service


@register_service
class ProductsService(EntityService[Product, ProductDraft]):
    kind = EntityKind.PRODUCT
    entity_model = Product
    draft_model = ProductDraft
    singular = "product"
    plural = "products"
    record_name = "product"
