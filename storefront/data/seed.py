# storefront/data/seed.py
from decimal import Decimal

from storefront.data.bootstrap import init_db
from storefront.data.database import SessionLocal
from storefront.data.models import ProductModel, UserModel
from storefront.domain.enums import Role
from storefront.utils.security import hash_password
from storefront.utils.logging import get_logger

logger = get_logger(__name__)

PRODUCTS = [
    {
        "name": "GS Pro Elite Running Jacket",
        "description": "Moisture-wicking running jacket with reflective details.",
        "price": Decimal("129.99"),
        "original_price": Decimal("179.99"),
        "images": ["https://images.unsplash.com/photo-1542291026-7eec264c27ff?w=600"],
        "category": "UPPER_WEAR",
        "gender": "MEN",
        "sizes": ["XS", "S", "M", "L", "XL", "XXL"],
        "colors": ["#0ea5e9", "#1e293b", "#f97316"],
        "stock": 42,
        "is_featured": True,
    },
    {
        "name": "GS Aero Training Tee",
        "description": "Lightweight training tee.",
        "price": Decimal("39.99"),
        "images": [],
        "category": "SUMMER_WEAR",
        "gender": "UNISEX",
        "sizes": ["S", "M", "L"],
        "colors": ["#ffffff", "#000000"],
        "stock": 120,
    },
    {
        "name": "GS Thermal Joggers",
        "description": "Fleece-lined joggers for cold mornings.",
        "price": Decimal("64.50"),
        "images": [],
        "category": "LOWER_WEAR",
        "gender": "WOMEN",
        "sizes": ["XS", "S", "M", "L"],
        "colors": ["#1e293b"],
        "stock": 30,
    },
]


def seed():
    init_db()
    db = SessionLocal()
    try:
        # nie wymuszamy: tylko gdy baza jest pusta
        if db.query(UserModel).first():
            return

        db.add(UserModel(name="Admin", email="admin@storefront.dev",
                         password_hash=hash_password("admin123"), role=Role.ADMIN.value))
        db.add(UserModel(name="Demo User", email="user@storefront.dev",
                         password_hash=hash_password("user1234"), role=Role.USER.value))
        for data in PRODUCTS:
            db.add(ProductModel(**data))
        db.commit()
        logger.info(f"Seeded 2 users and {len(PRODUCTS)} products")
    finally:
        db.close()


if __name__ == "__main__":
    seed()
