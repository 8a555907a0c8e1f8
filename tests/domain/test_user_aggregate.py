"""Tests for the User aggregate, password handling and role derivation."""

import json

import pytest
from protean.exceptions import ValidationError
from storefront.user.events import DocumentsUploaded, UserRegistered, UserRoleChanged
from storefront.user.user import DEFAULT_PROFILE_IMAGE, REQUIRED_DOCUMENTS, User, derive_role


def _make_user(**overrides):
    defaults = {"email": "Ada@Example.com ", "password": "s3cret-pass", "first_name": "Ada"}
    defaults.update(overrides)
    return User.register(**defaults)


class TestDeriveRole:
    def test_complete_documents_promote_user(self):
        assert derive_role("user", REQUIRED_DOCUMENTS) == "premium"

    def test_subset_keeps_role(self):
        assert derive_role("user", ["identification", "proofOfAddress"]) == "user"

    def test_extra_documents_do_not_matter(self):
        assert derive_role("user", [*REQUIRED_DOCUMENTS, "selfie"]) == "premium"

    def test_admin_never_changes(self):
        assert derive_role("admin", REQUIRED_DOCUMENTS) == "admin"
        assert derive_role("admin", []) == "admin"

    def test_premium_without_documents_stays_premium(self):
        assert derive_role("premium", []) == "premium"


class TestRegistration:
    def test_email_is_normalized(self):
        user = _make_user()
        assert user.email == "ada@example.com"

    def test_password_is_hashed(self):
        user = _make_user()
        assert user.password_hash != "s3cret-pass"
        assert user.check_password("s3cret-pass")
        assert not user.check_password("wrong")

    def test_defaults(self):
        user = _make_user()
        assert user.role == "user"
        assert user.profile_image == DEFAULT_PROFILE_IMAGE
        assert user.purchase_ids() == []

    def test_invalid_email_rejected(self):
        with pytest.raises(ValidationError):
            _make_user(email="not-an-email")

    def test_password_required(self):
        with pytest.raises(ValidationError):
            _make_user(password="")

    def test_raises_registered_event(self):
        user = _make_user()
        events = [e for e in user._events if isinstance(e, UserRegistered)]
        assert events[0].email == "ada@example.com"


class TestPassword:
    def test_set_password(self):
        user = _make_user()
        user.set_password("another-pass")
        assert user.check_password("another-pass")

    def test_same_password_rejected(self):
        user = _make_user()
        with pytest.raises(ValidationError):
            user.set_password("s3cret-pass")


class TestProfile:
    def test_blank_fields_keep_current_values(self):
        user = _make_user(last_name="Lovelace", age=36)
        user.update_profile(first_name="", last_name=None, age=None, profile_image="/uploads/ada.png")
        assert user.first_name == "Ada"
        assert user.last_name == "Lovelace"
        assert user.age == 36
        assert user.profile_image == "/uploads/ada.png"


class TestDocuments:
    def test_all_documents_promote_to_premium(self):
        user = _make_user()
        user.upload_documents({name: f"/uploads/documents/{name}.pdf" for name in REQUIRED_DOCUMENTS})
        assert user.role == "premium"
        assert any(isinstance(e, UserRoleChanged) for e in user._events)

    def test_subset_leaves_role_unchanged(self):
        user = _make_user()
        user.upload_documents({"identification": "/uploads/documents/id.pdf"})
        assert user.role == "user"
        assert not any(isinstance(e, UserRoleChanged) for e in user._events)

    def test_same_name_document_is_replaced(self):
        user = _make_user()
        user.upload_documents({"identification": "/uploads/documents/old.pdf"})
        user.upload_documents({"identification": "/uploads/documents/new.pdf"})
        assert len(user.documents) == 1
        assert user.documents[0].reference == "/uploads/documents/new.pdf"

    def test_uploads_accumulate_towards_premium(self):
        user = _make_user()
        user.upload_documents({"identification": "/a.pdf"})
        user.upload_documents({"proofOfAddress": "/b.pdf"})
        assert user.role == "user"
        user.upload_documents({"accountStatement": "/c.pdf"})
        assert user.role == "premium"

    def test_admin_is_not_demoted(self):
        user = _make_user(role="admin")
        user.upload_documents({"identification": "/a.pdf"})
        assert user.role == "admin"

    def test_event_lists_uploaded_names(self):
        user = _make_user()
        user.upload_documents({"proofOfAddress": "/b.pdf", "identification": "/a.pdf"})
        event = [e for e in user._events if isinstance(e, DocumentsUploaded)][-1]
        assert json.loads(event.document_names) == ["identification", "proofOfAddress"]

    def test_empty_upload_rejected(self):
        user = _make_user()
        with pytest.raises(ValidationError):
            user.upload_documents({})


class TestRoles:
    def test_toggle_premium_both_ways(self):
        user = _make_user()
        user.toggle_premium()
        assert user.role == "premium"
        user.toggle_premium()
        assert user.role == "user"

    def test_toggle_leaves_admin_alone(self):
        user = _make_user(role="admin")
        user.toggle_premium()
        assert user.role == "admin"

    def test_change_role(self):
        user = _make_user()
        user.change_role("admin")
        assert user.is_admin()

    def test_unknown_role_rejected(self):
        user = _make_user()
        with pytest.raises(ValidationError):
            user.change_role("superuser")


class TestActivity:
    def test_last_activity_falls_back_to_creation(self):
        user = _make_user()
        assert user.last_activity() == user.created_at

    def test_record_login(self):
        user = _make_user()
        user.record_login()
        assert user.last_activity() == user.last_connection

    def test_record_purchase(self):
        user = _make_user()
        user.record_purchase("ticket-1")
        user.record_purchase("ticket-2")
        assert user.purchase_ids() == ["ticket-1", "ticket-2"]
