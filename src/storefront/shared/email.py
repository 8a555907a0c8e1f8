"""EmailAddress value object for validated email addresses."""

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import String

from storefront.domain import storefront

_FORBIDDEN_CHARACTERS = (";", ",", "(", ")", '"', ":", "<", ">", "[", "]", "\\")


@storefront.value_object
class EmailAddress:
    """A structurally valid email address.

    Exactly one @, non-empty local and domain parts, a dotted domain, no
    whitespace, no consecutive dots and none of the characters that would make
    the address unsafe to embed in a mail header. Addresses are normalized to
    lower case by :func:`normalize_email` before they are stored.
    """

    address: String(required=True, max_length=254)

    @invariant.post
    def verify_email_address(self):
        email = self.address

        if any(ch in email for ch in (" ", "\t", "\n")) or email.count("@") != 1:
            raise ValidationError({"email": [f"Invalid email address: {email!r}"]})

        local_part, domain_part = email.split("@", 1)

        if not local_part or local_part.startswith(".") or local_part.endswith("."):
            raise ValidationError({"email": [f"Invalid email address: {email!r}"]})

        if not domain_part or "." not in domain_part or domain_part.startswith(".") or domain_part.endswith("."):
            raise ValidationError({"email": [f"Invalid email address: {email!r}"]})

        for label in domain_part.split("."):
            if label.startswith("-") or label.endswith("-"):
                raise ValidationError({"email": [f"Invalid email address: {email!r}"]})

        if ".." in email:
            raise ValidationError({"email": [f"Invalid email address: {email!r}"]})

        if any(ch in email for ch in _FORBIDDEN_CHARACTERS):
            raise ValidationError({"email": [f"Invalid email address: {email!r}"]})


def normalize_email(email: str) -> str:
    """Validate ``email`` and return its canonical (trimmed, lower-case) form."""
    canonical = (email or "").strip().lower()
    return EmailAddress(address=canonical).address
