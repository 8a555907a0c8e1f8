"""Email templates.

Each template renders ``{"subject": ..., "body": ...}`` from a context dict.
"""

import json


class PurchaseReceiptTemplate:
    @staticmethod
    def render(context: dict) -> dict:
        first_name = context.get("first_name") or "there"
        code = context.get("code", "N/A")
        amount = float(context.get("amount", 0))
        items = context.get("items") or []
        if isinstance(items, str):
            items = json.loads(items)

        lines = "".join(
            (
                f"Product: {item.get('name')}\n"
                f"Description: {item.get('description') or ''}\n"
                f"Unit price: ${float(item.get('price', 0)):.2f}\n"
                f"Quantity: {item.get('quantity')}\n\n"
            )
            for item in items
        )
        return {
            "subject": "Purchase ticket",
            "body": (
                f"Hi {first_name}!\n\n"
                f"Here is your ticket number: {code}\n\n"
                f"{lines}"
                f"Total: ${amount:.2f}\n\n"
                "We hope to see you again soon."
            ),
        }


class AccountDeletedByAdminTemplate:
    @staticmethod
    def render(context: dict) -> dict:
        return {
            "subject": "Account deleted",
            "body": "Your account has been deleted by an administrator.",
        }


class AccountDeletedForInactivityTemplate:
    @staticmethod
    def render(context: dict) -> dict:
        days = context.get("days", 2)
        return {
            "subject": "Account deleted",
            "body": (
                f"Your account has been deleted after {days} days without activity.\n\n"
                "The administration team"
            ),
        }


class ProductDeletedTemplate:
    @staticmethod
    def render(context: dict) -> dict:
        name = context.get("name", "")
        return {
            "subject": "Product deleted",
            "body": f'Your product "{name}" has been deleted.',
        }


class PasswordResetTemplate:
    @staticmethod
    def render(context: dict) -> dict:
        link = context["reset_link"]
        minutes = context.get("expires_minutes", 60)
        return {
            "subject": "Reset your password",
            "body": (
                "Follow the link below to reset your password:\n\n"
                f"{link}\n\n"
                f"The link expires in {minutes} minutes."
            ),
            "html_body": (
                "<p>Follow the link below to reset your password:</p>"
                f'<p><a href="{link}">Reset password</a></p>'
                f"<p>The link expires in {minutes} minutes.</p>"
            ),
        }
