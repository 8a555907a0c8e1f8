"""Domain events for the User aggregate."""

from protean.fields import DateTime, Identifier, String, Text

from storefront.domain import storefront


@storefront.event(part_of="User")
class UserRegistered:
    """A new account was created and its cart provisioned."""

    __version__ = 1

    user_id = Identifier(required=True)
    email = String(required=True)
    first_name = String()
    last_name = String()
    role = String(required=True)
    registered_at = DateTime(required=True)


@storefront.event(part_of="User")
class UserLoggedIn:
    __version__ = 1

    user_id = Identifier(required=True)
    logged_in_at = DateTime(required=True)


@storefront.event(part_of="User")
class ProfileUpdated:
    __version__ = 1

    user_id = Identifier(required=True)
    first_name = String()
    last_name = String()


@storefront.event(part_of="User")
class DocumentsUploaded:
    """Verification documents were stored; ``document_names`` is a JSON array."""

    __version__ = 1

    user_id = Identifier(required=True)
    document_names = Text(required=True)


@storefront.event(part_of="User")
class UserRoleChanged:
    __version__ = 1

    user_id = Identifier(required=True)
    previous_role = String(required=True)
    new_role = String(required=True)


@storefront.event(part_of="User")
class PasswordChanged:
    __version__ = 1

    user_id = Identifier(required=True)
    changed_at = DateTime(required=True)
