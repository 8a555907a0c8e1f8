"""Pydantic request/response schemas for the Storefront API."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

# --- Response Schemas ---


class Envelope(BaseModel):
    model_config = {"json_schema_extra": {"examples": [{"status": "success", "message": "OK", "payload": {}}]}}

    status: str = "success"
    message: str | None = None
    payload: Any = None


class ProductPageResponse(BaseModel):
    status: str = "success"
    payload: list[dict]
    total: int
    total_pages: int
    page: int
    limit: int
    has_prev_page: bool
    has_next_page: bool
    prev_page: int | None = None
    next_page: int | None = None


class PurchaseResponse(BaseModel):
    status: str = "success"
    message: str
    ticket: dict | None = None
    unavailable: list[dict] = Field(default_factory=list)


# --- Product Request Schemas ---


class CreateProductRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "name": "Mechanical Keyboard",
                    "description": "Tenkeyless, brown switches.",
                    "price": 89.9,
                    "stock": 25,
                    "category": "Peripherals",
                    "thumbnail": "/uploads/keyboard.jpg",
                }
            ]
        }
    }

    name: str = Field(..., max_length=255)
    description: str | None = None
    price: float
    stock: int = 0
    category: str | None = Field(None, max_length=100)
    status: bool = True
    thumbnail: str | None = Field(None, max_length=500)


class UpdateProductRequest(BaseModel):
    name: str | None = Field(None, max_length=255)
    description: str | None = None
    price: float | None = None
    stock: int | None = None
    category: str | None = Field(None, max_length=100)
    status: bool | None = None
    thumbnail: str | None = Field(None, max_length=500)


class SeedProductsRequest(BaseModel):
    count: int = 100


# --- Cart Request Schemas ---


class CartQuantityRequest(BaseModel):
    """Quantity for a cart line; range checks happen in the domain."""

    model_config = {"json_schema_extra": {"examples": [{"quantity": 2}]}}

    quantity: Any = 1


class CartLineRequest(BaseModel):
    product_id: str
    quantity: Any


class ReplaceCartRequest(BaseModel):
    products: list[CartLineRequest]


# --- Session / User Request Schemas ---


class RegisterRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "email": "ada@example.com",
                    "password": "s3cret-pass",
                    "first_name": "Ada",
                    "last_name": "Lovelace",
                    "age": 36,
                }
            ]
        }
    }

    email: str = Field(..., max_length=254)
    password: str = Field(..., min_length=1, max_length=128)
    first_name: str | None = Field(None, max_length=100)
    last_name: str | None = Field(None, max_length=100)
    age: int | None = None


class LoginRequest(BaseModel):
    email: str = Field(..., max_length=254)
    password: str = Field(..., max_length=128)


class ForgotPasswordRequest(BaseModel):
    email: str = Field(..., max_length=254)


class ResetPasswordRequest(BaseModel):
    password: str = Field(..., min_length=1, max_length=128)
    confirm_password: str = Field(..., min_length=1, max_length=128)


class ChangeRoleRequest(BaseModel):
    role: str


# --- Chat Request Schemas ---


class PostMessageRequest(BaseModel):
    message: str
