"""Faker-based product generator for demos and seeding."""

from uuid import uuid4

from faker import Faker

fake = Faker()


def generate_mock_products(count: int = 100) -> list[dict]:
    """Generate ``count`` product payloads that pass Product validation."""
    products = []
    for _ in range(count):
        created_at = fake.date_time_this_year()
        products.append(
            {
                "id": str(uuid4()),
                "name": fake.catch_phrase()[:255],
                "description": fake.sentence(nb_words=12),
                "price": float(fake.pydecimal(left_digits=3, right_digits=2, positive=True, min_value=1)),
                "category": fake.word().title(),
                "stock": fake.random_int(min=10, max=100),
                "thumbnail": fake.image_url(),
                "created_at": created_at.isoformat(),
            }
        )
    return products
