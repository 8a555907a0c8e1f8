"""User aggregate: accounts, roles and verification documents.

Passwords are only ever held as bcrypt hashes. A user's role is either set
explicitly (premium toggle, admin change) or recomputed from the set of
verification documents on file by :func:`derive_role`.
"""

import json
from datetime import datetime
from enum import Enum

from protean.exceptions import ValidationError
from protean.fields import DateTime, HasMany, Identifier, Integer, String, Text

from storefront.domain import storefront
from storefront.shared.email import normalize_email
from storefront.shared.security import hash_password, verify_password
from storefront.user.events import (
    DocumentsUploaded,
    PasswordChanged,
    ProfileUpdated,
    UserLoggedIn,
    UserRegistered,
    UserRoleChanged,
)

DEFAULT_PROFILE_IMAGE = "/uploads/default.jpg"

# Documents that, once all on file, promote a user to premium
REQUIRED_DOCUMENTS = frozenset({"identification", "proofOfAddress", "accountStatement"})


class Role(Enum):
    USER = "user"
    PREMIUM = "premium"
    ADMIN = "admin"


def derive_role(role: str, document_names) -> str:
    """Role a user should hold given the documents on file.

    Admins are never changed and a complete document set promotes to
    premium. Anything short of that keeps the current role.
    """
    if role == Role.ADMIN.value:
        return role
    if REQUIRED_DOCUMENTS.issubset(set(document_names)):
        return Role.PREMIUM.value
    return role


@storefront.entity(part_of="User")
class Document:
    name = String(required=True, max_length=100)
    reference = String(required=True, max_length=500)
    uploaded_at = DateTime()


@storefront.aggregate
class User:
    email = String(required=True, max_length=254, unique=True)
    password_hash = String(max_length=255)
    first_name = String(max_length=100)
    last_name = String(max_length=100)
    age = Integer(min_value=0, max_value=150)
    profile_image = String(max_length=500, default=DEFAULT_PROFILE_IMAGE)
    role = String(choices=Role, default=Role.USER.value)
    cart_id = Identifier()
    documents = HasMany(Document)
    purchases = Text()  # JSON array of ticket ids
    last_connection = DateTime()
    created_at = DateTime()

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def register(cls, email, password, first_name=None, last_name=None, age=None, role=Role.USER.value):
        if not password:
            raise ValidationError({"password": ["Password is required"]})

        now = datetime.now()
        user = cls(
            email=normalize_email(email),
            password_hash=hash_password(password),
            first_name=first_name,
            last_name=last_name,
            age=age,
            role=role or Role.USER.value,
            purchases=json.dumps([]),
            created_at=now,
        )
        user.raise_(
            UserRegistered(
                user_id=str(user.id),
                email=user.email,
                first_name=first_name,
                last_name=last_name,
                role=user.role,
                registered_at=now,
            )
        )
        return user

    # -------------------------------------------------------------------
    # Account
    # -------------------------------------------------------------------
    def attach_cart(self, cart_id):
        self.cart_id = cart_id

    def check_password(self, password) -> bool:
        return verify_password(password, self.password_hash)

    def set_password(self, new_password):
        if not new_password:
            raise ValidationError({"password": ["Password is required"]})
        if self.check_password(new_password):
            raise ValidationError({"password": ["New password must differ from the current one"]})

        now = datetime.now()
        self.password_hash = hash_password(new_password)
        self.raise_(PasswordChanged(user_id=str(self.id), changed_at=now))

    def record_login(self):
        now = datetime.now()
        self.last_connection = now
        self.raise_(UserLoggedIn(user_id=str(self.id), logged_in_at=now))

    def last_activity(self) -> datetime | None:
        return self.last_connection or self.created_at

    def update_profile(self, first_name=None, last_name=None, age=None, profile_image=None):
        """Apply the provided profile fields; blank values keep the current ones."""
        if first_name:
            self.first_name = first_name
        if last_name:
            self.last_name = last_name
        if age is not None and age != "":
            self.age = age
        if profile_image:
            self.profile_image = profile_image

        self.raise_(ProfileUpdated(user_id=str(self.id), first_name=self.first_name, last_name=self.last_name))

    # -------------------------------------------------------------------
    # Purchases
    # -------------------------------------------------------------------
    def purchase_ids(self) -> list[str]:
        return json.loads(self.purchases) if self.purchases else []

    def record_purchase(self, ticket_id):
        self.purchases = json.dumps(self.purchase_ids() + [str(ticket_id)])

    # -------------------------------------------------------------------
    # Roles and documents
    # -------------------------------------------------------------------
    def document_names(self) -> list[str]:
        return [document.name for document in self.documents]

    def upload_documents(self, documents: dict):
        """Store ``{name: reference}`` documents, replacing same-name entries, then recompute the role."""
        if not documents:
            raise ValidationError({"documents": ["At least one document is required"]})

        now = datetime.now()
        for name, reference in documents.items():
            existing = next((d for d in self.documents if d.name == name), None)
            if existing is not None:
                self.remove_documents(existing)
            self.add_documents(Document(name=name, reference=reference, uploaded_at=now))

        self.raise_(DocumentsUploaded(user_id=str(self.id), document_names=json.dumps(sorted(documents))))
        self._set_role(derive_role(self.role, self.document_names()))

    def toggle_premium(self):
        """Switch between user and premium; admins are left as they are."""
        if self.role == Role.USER.value:
            self._set_role(Role.PREMIUM.value)
        elif self.role == Role.PREMIUM.value:
            self._set_role(Role.USER.value)

    def change_role(self, role):
        if role not in {r.value for r in Role}:
            raise ValidationError({"role": [f"Unknown role: {role}"]})
        self._set_role(role)

    def is_admin(self) -> bool:
        return self.role == Role.ADMIN.value

    def _set_role(self, new_role):
        previous_role = self.role
        if new_role == previous_role:
            return

        self.role = new_role
        self.raise_(UserRoleChanged(user_id=str(self.id), previous_role=previous_role, new_role=new_role))

    def to_payload(self) -> dict:
        return {
            "id": str(self.id),
            "email": self.email,
            "first_name": self.first_name,
            "last_name": self.last_name,
            "age": self.age,
            "profile_image": self.profile_image,
            "role": self.role,
            "cart_id": str(self.cart_id) if self.cart_id else None,
            "documents": [{"name": d.name, "reference": d.reference} for d in self.documents],
            "purchases": self.purchase_ids(),
            "last_connection": self.last_connection.isoformat() if self.last_connection else None,
        }
