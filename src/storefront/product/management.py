"""Product catalog management: commands and handler."""

import structlog
from protean import handle
from protean.fields import Boolean, Float, Identifier, Integer, String, Text
from protean.utils.globals import current_domain

from storefront.domain import storefront
from storefront.exceptions import ForbiddenError
from storefront.mail.dispatch import send_email
from storefront.mail.templates import ProductDeletedTemplate
from storefront.product.mocking import generate_mock_products
from storefront.product.product import ADMIN_OWNER, Product

logger = structlog.get_logger(__name__)


@storefront.command(part_of="Product")
class CreateProduct:
    """List a new product; ``owner`` is the creating user's id or ``admin``."""

    name: String(required=True, max_length=255)
    description: Text()
    price: Float(required=True, min_value=0.0)
    stock: Integer(min_value=0, default=0)
    category: String(max_length=100)
    status: Boolean(default=True)
    thumbnail: String(max_length=500)
    owner: String(max_length=255)


@storefront.command(part_of="Product")
class UpdateProduct:
    product_id: Identifier(required=True)
    requester_id: Identifier(required=True)
    requester_role: String(required=True, max_length=20)
    name: String(max_length=255)
    description: Text()
    price: Float(min_value=0.0)
    stock: Integer(min_value=0)
    category: String(max_length=100)
    status: Boolean()
    thumbnail: String(max_length=500)


@storefront.command(part_of="Product")
class DeleteProduct:
    product_id: Identifier(required=True)
    requester_id: Identifier(required=True)
    requester_role: String(required=True, max_length=20)


@storefront.command(part_of="Product")
class SeedProducts:
    """Persist a batch of generated products owned by the admin."""

    count: Integer(min_value=1, max_value=500, default=100)


def _ensure_can_manage(product: Product, requester_id, requester_role) -> None:
    if requester_role == "admin":
        return
    if not product.is_owned_by(requester_id):
        raise ForbiddenError({"product": ["Only the owner or an admin can manage this product"]})


@storefront.command_handler(part_of=Product)
class ManageProductHandler:
    @handle(CreateProduct)
    def create_product(self, command):
        product = Product.create(
            name=command.name,
            description=command.description,
            price=command.price,
            stock=command.stock,
            category=command.category,
            status=command.status,
            thumbnail=command.thumbnail,
            owner=command.owner or ADMIN_OWNER,
        )
        current_domain.repository_for(Product).add(product)
        logger.info("Product created", product_id=str(product.id), owner=product.owner)
        return str(product.id)

    @handle(UpdateProduct)
    def update_product(self, command):
        repo = current_domain.repository_for(Product)
        product = repo.get(command.product_id)
        _ensure_can_manage(product, command.requester_id, command.requester_role)

        product.update_details(
            name=command.name,
            description=command.description,
            price=command.price,
            stock=command.stock,
            category=command.category,
            status=command.status,
            thumbnail=command.thumbnail,
        )
        repo.add(product)

    @handle(DeleteProduct)
    def delete_product(self, command):
        repo = current_domain.repository_for(Product)
        product = repo.get(command.product_id)
        _ensure_can_manage(product, command.requester_id, command.requester_role)

        if product.owner != ADMIN_OWNER:
            from storefront.user.user import User

            owner = current_domain.repository_for(User).find_by_id(product.owner)
            if owner is not None:
                send_email(owner.email, **ProductDeletedTemplate.render({"name": product.name}))

        repo._dao.delete(product)
        logger.info("Product deleted", product_id=str(command.product_id), owner=product.owner)

    @handle(SeedProducts)
    def seed_products(self, command):
        repo = current_domain.repository_for(Product)
        created = 0
        for payload in generate_mock_products(command.count or 100):
            repo.add(
                Product.create(
                    name=payload["name"],
                    description=payload["description"],
                    price=payload["price"],
                    stock=payload["stock"],
                    category=payload["category"],
                    thumbnail=payload["thumbnail"],
                )
            )
            created += 1

        logger.info("Products seeded", count=created)
        return created
