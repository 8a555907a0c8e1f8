"""FastAPI routes for the Storefront API.

Thin adapters that translate HTTP requests into domain commands and shape
the results into ``{"status": ..., ...}`` envelopes.
"""

from fastapi import APIRouter, Depends, File, Form, Query, UploadFile
from fastapi.responses import JSONResponse
from protean.utils.globals import current_domain

from storefront.api.auth import Principal, ensure_self_or_admin, get_current_principal, require_roles
from storefront.api.schemas import (
    CartQuantityRequest,
    ChangeRoleRequest,
    CreateProductRequest,
    Envelope,
    ForgotPasswordRequest,
    LoginRequest,
    PostMessageRequest,
    ProductPageResponse,
    PurchaseResponse,
    RegisterRequest,
    ReplaceCartRequest,
    ResetPasswordRequest,
    SeedProductsRequest,
    UpdateProductRequest,
)
from storefront.api.uploads import store_upload
from storefront.cart.items import (
    AddToCart,
    ClearCart,
    RemoveFromCart,
    ReplaceCartQuantities,
    UpdateCartItemQuantity,
)
from storefront.cart.purchase import PurchaseCart
from storefront.cart.view import cart_details
from storefront.chat.posting import DeleteMessage, PostMessage, chat_history
from storefront.product.management import CreateProduct, DeleteProduct, SeedProducts, UpdateProduct
from storefront.product.mocking import generate_mock_products
from storefront.product.product import ADMIN_OWNER, Product
from storefront.user.documents import UploadDocuments
from storefront.user.password_reset import RequestPasswordReset, ResetPassword
from storefront.user.profile import UpdateProfile
from storefront.user.registration import RegisterUser
from storefront.user.removal import DeleteInactiveUsers, DeleteUser
from storefront.user.roles import ChangeUserRole, TogglePremium
from storefront.user.session import LoginUser, LogoutUser
from storefront.user.user import User

ADMIN = "admin"
PREMIUM = "premium"
USER = "user"

product_router = APIRouter(prefix="/api/products", tags=["products"])
cart_router = APIRouter(prefix="/api/carts", tags=["carts"])
session_router = APIRouter(prefix="/api/sessions", tags=["sessions"])
user_router = APIRouter(prefix="/api/users", tags=["users"])
chat_router = APIRouter(prefix="/api/chat", tags=["chat"])


# ---------------------------------------------------------------------------
# Products
# ---------------------------------------------------------------------------
@product_router.get("", response_model=ProductPageResponse)
async def list_products(
    query: str | None = None,
    category: str | None = None,
    sort: str | None = Query(None, pattern="^(asc|desc)$"),
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
) -> ProductPageResponse:
    result = current_domain.repository_for(Product).paginate(
        query=query, category=category, sort=sort, page=page, limit=limit
    )
    return ProductPageResponse(
        payload=[product.to_payload() for product in result.items],
        total=result.total,
        total_pages=result.total_pages,
        page=result.page,
        limit=result.limit,
        has_prev_page=result.has_prev_page,
        has_next_page=result.has_next_page,
        prev_page=result.prev_page,
        next_page=result.next_page,
    )


@product_router.get("/mockingproducts", response_model=Envelope)
async def mocking_products() -> Envelope:
    return Envelope(message="Generated mock products", payload=generate_mock_products(100))


@product_router.post("/seed", status_code=201, response_model=Envelope)
async def seed_products(body: SeedProductsRequest, _: Principal = Depends(require_roles(ADMIN))) -> Envelope:
    created = current_domain.process(SeedProducts(count=body.count), asynchronous=False)
    return Envelope(message=f"{created} products created", payload={"created": created})


@product_router.get("/{product_id}", response_model=Envelope)
async def get_product(product_id: str) -> Envelope:
    product = current_domain.repository_for(Product).get(product_id)
    return Envelope(payload=product.to_payload())


@product_router.post("", status_code=201, response_model=Envelope)
async def create_product(
    body: CreateProductRequest,
    principal: Principal = Depends(require_roles(ADMIN, PREMIUM)),
) -> Envelope:
    command = CreateProduct(
        name=body.name,
        description=body.description,
        price=body.price,
        stock=body.stock,
        category=body.category,
        status=body.status,
        thumbnail=body.thumbnail,
        owner=ADMIN_OWNER if principal.is_admin else principal.id,
    )
    product_id = current_domain.process(command, asynchronous=False)
    product = current_domain.repository_for(Product).get(product_id)
    return Envelope(message="Product created", payload=product.to_payload())


@product_router.put("/{product_id}", response_model=Envelope)
async def update_product(
    product_id: str,
    body: UpdateProductRequest,
    principal: Principal = Depends(require_roles(ADMIN, PREMIUM)),
) -> Envelope:
    command = UpdateProduct(
        product_id=product_id,
        requester_id=principal.id,
        requester_role=principal.role,
        **body.model_dump(exclude_none=True),
    )
    current_domain.process(command, asynchronous=False)
    product = current_domain.repository_for(Product).get(product_id)
    return Envelope(message="Product updated", payload=product.to_payload())


@product_router.delete("/{product_id}", response_model=Envelope)
async def delete_product(product_id: str, principal: Principal = Depends(require_roles(ADMIN, PREMIUM))) -> Envelope:
    command = DeleteProduct(product_id=product_id, requester_id=principal.id, requester_role=principal.role)
    current_domain.process(command, asynchronous=False)
    return Envelope(message="Product deleted")


# ---------------------------------------------------------------------------
# Carts
# ---------------------------------------------------------------------------
@cart_router.get("/{cart_id}", response_model=Envelope)
async def get_cart(cart_id: str, _: Principal = Depends(get_current_principal)) -> Envelope:
    return Envelope(payload=cart_details(cart_id))


@cart_router.put("/{cart_id}", response_model=Envelope)
async def replace_cart(
    cart_id: str,
    body: ReplaceCartRequest,
    _: Principal = Depends(require_roles(USER, PREMIUM)),
) -> Envelope:
    quantities = {line.product_id: line.quantity for line in body.products}
    current_domain.process(ReplaceCartQuantities(cart_id=cart_id, quantities=quantities), asynchronous=False)
    return Envelope(message="Cart updated", payload=cart_details(cart_id))


@cart_router.post("/{cart_id}/products/{product_id}", response_model=Envelope)
async def add_to_cart(
    cart_id: str,
    product_id: str,
    body: CartQuantityRequest | None = None,
    principal: Principal = Depends(require_roles(USER, PREMIUM)),
) -> Envelope:
    quantity = body.quantity if body is not None else 1
    command = AddToCart(cart_id=cart_id, product_id=product_id, quantity=quantity, requester_id=principal.id)
    current_domain.process(command, asynchronous=False)
    return Envelope(message="Product added to cart", payload=cart_details(cart_id))


@cart_router.put("/{cart_id}/products/{product_id}", response_model=Envelope)
async def update_cart_item(
    cart_id: str,
    product_id: str,
    body: CartQuantityRequest,
    _: Principal = Depends(require_roles(USER, PREMIUM)),
) -> Envelope:
    command = UpdateCartItemQuantity(cart_id=cart_id, product_id=product_id, quantity=body.quantity)
    current_domain.process(command, asynchronous=False)
    return Envelope(message="Quantity updated", payload=cart_details(cart_id))


@cart_router.delete("/{cart_id}/products/{product_id}", response_model=Envelope)
async def remove_from_cart(
    cart_id: str,
    product_id: str,
    _: Principal = Depends(require_roles(USER, PREMIUM)),
) -> Envelope:
    current_domain.process(RemoveFromCart(cart_id=cart_id, product_id=product_id), asynchronous=False)
    return Envelope(message="Product removed from cart", payload=cart_details(cart_id))


@cart_router.delete("/{cart_id}", response_model=Envelope)
async def clear_cart(cart_id: str, _: Principal = Depends(require_roles(USER, PREMIUM))) -> Envelope:
    current_domain.process(ClearCart(cart_id=cart_id), asynchronous=False)
    return Envelope(message="Cart cleared", payload=cart_details(cart_id))


@cart_router.get("/{cart_id}/purchase", response_model=PurchaseResponse)
async def purchase_cart(cart_id: str, principal: Principal = Depends(require_roles(USER, PREMIUM))):
    result = current_domain.process(
        PurchaseCart(cart_id=cart_id, purchaser_email=principal.email),
        asynchronous=False,
    )
    if result["ticket"] is None:
        return JSONResponse(
            status_code=400,
            content={
                "status": "error",
                "message": "None of the products in the cart are available",
                "errors": {},
                "unavailable": result["unavailable"],
            },
        )

    return PurchaseResponse(message="Purchase completed", ticket=result["ticket"], unavailable=result["unavailable"])


# ---------------------------------------------------------------------------
# Sessions
# ---------------------------------------------------------------------------
@session_router.post("/register", status_code=201, response_model=Envelope)
async def register(body: RegisterRequest) -> Envelope:
    command = RegisterUser(
        email=body.email,
        password=body.password,
        first_name=body.first_name,
        last_name=body.last_name,
        age=body.age,
    )
    user = current_domain.process(command, asynchronous=False)
    return Envelope(message="User registered", payload=user)


@session_router.post("/login", response_model=Envelope)
async def login(body: LoginRequest) -> Envelope:
    result = current_domain.process(LoginUser(email=body.email, password=body.password), asynchronous=False)
    return Envelope(message="Logged in", payload=result)


@session_router.post("/logout", response_model=Envelope)
async def logout(principal: Principal = Depends(get_current_principal)) -> Envelope:
    current_domain.process(LogoutUser(session_id=principal.session_id), asynchronous=False)
    return Envelope(message="Logged out")


@session_router.get("/profile", response_model=Envelope)
async def profile(principal: Principal = Depends(get_current_principal)) -> Envelope:
    user = current_domain.repository_for(User).get(principal.id)
    return Envelope(payload=user.to_payload())


@session_router.post("/profile/{user_id}", response_model=Envelope)
async def update_profile(
    user_id: str,
    first_name: str | None = Form(None),
    last_name: str | None = Form(None),
    age: int | None = Form(None),
    profile_image: UploadFile | None = File(None),
    principal: Principal = Depends(get_current_principal),
) -> Envelope:
    ensure_self_or_admin(principal, user_id)

    reference = await store_upload(profile_image) if profile_image is not None and profile_image.filename else None
    command = UpdateProfile(
        user_id=user_id,
        first_name=first_name,
        last_name=last_name,
        age=age,
        profile_image=reference,
    )
    user = current_domain.process(command, asynchronous=False)
    return Envelope(message="Profile updated", payload=user)


@session_router.post("/{user_id}/documents", response_model=Envelope)
async def upload_documents(
    user_id: str,
    identification: UploadFile | None = File(None),
    proofOfAddress: UploadFile | None = File(None),  # noqa: N803
    accountStatement: UploadFile | None = File(None),  # noqa: N803
    principal: Principal = Depends(get_current_principal),
) -> Envelope:
    ensure_self_or_admin(principal, user_id)

    uploads = {
        "identification": identification,
        "proofOfAddress": proofOfAddress,
        "accountStatement": accountStatement,
    }
    documents = {}
    for name, upload in uploads.items():
        if upload is not None and upload.filename:
            documents[name] = await store_upload(upload, subdir="documents")

    user = current_domain.process(UploadDocuments(user_id=user_id, documents=documents), asynchronous=False)
    return Envelope(message="Documents uploaded", payload=user)


@session_router.put("/premium/{user_id}", response_model=Envelope)
async def toggle_premium(user_id: str, principal: Principal = Depends(get_current_principal)) -> Envelope:
    ensure_self_or_admin(principal, user_id)
    role = current_domain.process(TogglePremium(user_id=user_id), asynchronous=False)
    return Envelope(message=f"Role is now {role}", payload={"role": role})


@session_router.post("/forgot-password", response_model=Envelope)
async def forgot_password(body: ForgotPasswordRequest) -> Envelope:
    current_domain.process(RequestPasswordReset(email=body.email), asynchronous=False)
    return Envelope(message="Password reset email sent")


@session_router.post("/reset-password/{token}", response_model=Envelope)
async def reset_password(token: str, body: ResetPasswordRequest) -> Envelope:
    command = ResetPassword(token=token, password=body.password, confirm_password=body.confirm_password)
    current_domain.process(command, asynchronous=False)
    return Envelope(message="Password updated")


# ---------------------------------------------------------------------------
# Users (administration)
# ---------------------------------------------------------------------------
@user_router.get("", response_model=Envelope)
async def list_users(_: Principal = Depends(require_roles(ADMIN))) -> Envelope:
    users = current_domain.repository_for(User)._dao.query.all().items
    return Envelope(payload=[user.to_payload() for user in users])


@user_router.put("/{user_id}/role", response_model=Envelope)
async def change_role(user_id: str, body: ChangeRoleRequest, _: Principal = Depends(require_roles(ADMIN))) -> Envelope:
    role = current_domain.process(ChangeUserRole(user_id=user_id, role=body.role), asynchronous=False)
    return Envelope(message=f"Role is now {role}", payload={"role": role})


@user_router.delete("/inactive", response_model=Envelope)
async def delete_inactive_users(_: Principal = Depends(require_roles(ADMIN))) -> Envelope:
    removed = current_domain.process(DeleteInactiveUsers(), asynchronous=False)
    return Envelope(message=f"{removed} inactive users removed", payload={"removed": removed})


@user_router.delete("/{user_id}", response_model=Envelope)
async def delete_user(user_id: str, _: Principal = Depends(require_roles(ADMIN))) -> Envelope:
    current_domain.process(DeleteUser(user_id=user_id), asynchronous=False)
    return Envelope(message="User deleted")


# ---------------------------------------------------------------------------
# Chat
# ---------------------------------------------------------------------------
@chat_router.get("", response_model=Envelope)
async def list_messages(_: Principal = Depends(get_current_principal)) -> Envelope:
    return Envelope(payload=chat_history())


@chat_router.post("", status_code=201, response_model=Envelope)
async def post_message(body: PostMessageRequest, principal: Principal = Depends(require_roles(USER, PREMIUM))) -> Envelope:
    command = PostMessage(user=principal.email, sender_id=principal.id, message=body.message)
    message = current_domain.process(command, asynchronous=False)
    return Envelope(message="Message sent", payload=message)


@chat_router.delete("/{message_id}", response_model=Envelope)
async def delete_message(message_id: str, _: Principal = Depends(require_roles(ADMIN))) -> Envelope:
    current_domain.process(DeleteMessage(message_id=message_id), asynchronous=False)
    return Envelope(message="Message deleted")
