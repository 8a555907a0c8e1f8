"""Storefront management CLI.

Usage:
    python src/manage.py setup-db                 # Create all tables
    python src/manage.py drop-db                  # Drop all tables
    python src/manage.py seed-products --count 50 # Persist Faker-generated products
    python src/manage.py create-admin EMAIL PASSWORD
"""

import argparse
import sys


def _domain():
    from storefront.domain import storefront

    storefront.init()
    return storefront


def setup_database():
    from storefront.utils.db import setup_db

    domain = _domain()
    print("Creating storefront database schema...")
    setup_db(domain)
    print("Done.")


def drop_database():
    from storefront.utils.db import drop_db

    domain = _domain()
    print("Dropping storefront database schema...")
    drop_db(domain)
    print("Done.")


def seed_products(count):
    from storefront.product.management import SeedProducts

    domain = _domain()
    with domain.domain_context():
        created = domain.process(SeedProducts(count=count), asynchronous=False)
    print(f"Seeded {created} products.")


def create_admin(email, password):
    from storefront.user.registration import RegisterUser

    domain = _domain()
    with domain.domain_context():
        user = domain.process(RegisterUser(email=email, password=password, role="admin"), asynchronous=False)
    print(f"Admin {user['email']} created (id {user['id']}).")


def main():
    parser = argparse.ArgumentParser(description="Storefront management")
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("setup-db", help="Create all database tables")
    subparsers.add_parser("drop-db", help="Drop all database tables")

    seed_parser = subparsers.add_parser("seed-products", help="Persist generated products")
    seed_parser.add_argument("--count", type=int, default=100, help="Number of products (default: 100)")

    admin_parser = subparsers.add_parser("create-admin", help="Register an administrator account")
    admin_parser.add_argument("email")
    admin_parser.add_argument("password")

    args = parser.parse_args()

    if args.command == "setup-db":
        setup_database()
    elif args.command == "drop-db":
        drop_database()
    elif args.command == "seed-products":
        seed_products(args.count)
    elif args.command == "create-admin":
        create_admin(args.email, args.password)
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
