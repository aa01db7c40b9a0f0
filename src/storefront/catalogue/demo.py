"""Demo catalogue, seeded into the in-memory store when no hosted store is set up."""

from storefront.store.port import PRODUCTS

_PEXELS = "https://images.pexels.com/photos/{}/pexels-photo-{}.jpeg?auto=compress&cs=tinysrgb&w=400"

DEMO_PRODUCTS = [
    {
        "id": "1",
        "name": "Persian Cat - Snow White",
        "category": "cats",
        "price": 2500000,
        "image": _PEXELS.format(617278, 617278),
        "description": "Beautiful Persian cat with long white fur and blue eyes. Very friendly and well-trained.",
        "age": "3 months",
        "stock": 2,
        "delivery_days": 3,
    },
    {
        "id": "2",
        "name": "British Shorthair - Grey",
        "category": "cats",
        "price": 3000000,
        "image": _PEXELS.format(1741205, 1741205),
        "description": "Adorable British Shorthair with thick grey coat. Perfect family companion.",
        "age": "4 months",
        "stock": 1,
        "delivery_days": 2,
    },
    {
        "id": "3",
        "name": "Canary Bird - Yellow",
        "category": "birds",
        "price": 350000,
        "image": _PEXELS.format(1661179, 1661179),
        "description": "Beautiful singing canary with bright yellow feathers. Great for beginners.",
        "age": "6 months",
        "stock": 5,
        "delivery_days": 1,
    },
    {
        "id": "4",
        "name": "Goldfish - Orange",
        "category": "fish",
        "price": 15000,
        "image": _PEXELS.format(1335971, 1335971),
        "description": "Classic goldfish perfect for aquarium beginners. Easy to care for.",
        "stock": 20,
        "delivery_days": 1,
    },
    {
        "id": "5",
        "name": "Premium Cat Food - 5kg",
        "category": "food",
        "price": 120000,
        "image": _PEXELS.format(1458925, 1458925),
        "description": "High-quality dry cat food with essential nutrients for healthy growth.",
        "stock": 15,
        "delivery_days": 1,
    },
    {
        "id": "6",
        "name": "Cat Collar - Leather",
        "category": "accessories",
        "price": 45000,
        "image": _PEXELS.format(1404819, 1404819),
        "description": "Stylish leather collar with adjustable strap and bell.",
        "stock": 8,
        "delivery_days": 2,
    },
]


def seed_demo_catalogue(store) -> list[dict]:
    """Load the demo products into an InMemoryStore (synchronously)."""
    return store.seed(PRODUCTS, [{**product, "is_active": True} for product in DEMO_PRODUCTS])
