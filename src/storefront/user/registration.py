"""User registration: creates the account and its cart together.

Both records are written inside the handler's unit of work: the user is
built first, then the cart is provisioned and linked. If provisioning
fails the exception propagates and neither record is committed.
"""

import structlog
from protean import handle
from protean.fields import Integer, String
from protean.utils.globals import current_domain

from storefront.cart.cart import Cart
from storefront.domain import storefront
from storefront.exceptions import DuplicateEmailError
from storefront.shared.email import normalize_email
from storefront.user.user import Role, User

logger = structlog.get_logger(__name__)


@storefront.command(part_of="User")
class RegisterUser:
    email = String(required=True, max_length=254)
    password = String(required=True, max_length=128)
    first_name = String(max_length=100)
    last_name = String(max_length=100)
    age = Integer(min_value=0, max_value=150)
    role = String(choices=Role, default=Role.USER.value)


def provision_cart(user: User) -> Cart:
    cart = Cart.create(owner_id=user.id)
    current_domain.repository_for(Cart).add(cart)
    user.attach_cart(cart.id)
    return cart


@storefront.command_handler(part_of=User)
class RegisterUserHandler:
    @handle(RegisterUser)
    def register_user(self, command):
        repo = current_domain.repository_for(User)
        email = normalize_email(command.email)
        if repo.find_by_email(email) is not None:
            raise DuplicateEmailError({"email": [f"An account with {email} already exists"]})

        user = User.register(
            email=email,
            password=command.password,
            first_name=command.first_name,
            last_name=command.last_name,
            age=command.age,
            role=command.role,
        )
        cart = provision_cart(user)
        repo.add(user)

        logger.info("User registered", user_id=str(user.id), cart_id=str(cart.id), role=user.role)
        return user.to_payload()
