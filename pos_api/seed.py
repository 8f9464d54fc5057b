# pos_api/seed.py
#
# Loads the sample catalogue into an empty database:
#   python -m pos_api.seed

import logging
from decimal import Decimal

from sqlalchemy.orm import Session

from pos_api.database import Base, SessionLocal, engine
from pos_api.models.categories import Category
from pos_api.models.products import Product
from pos_api.models import sales, sale_items  # noqa: F401

logger = logging.getLogger("pos_api.seed")


SAMPLE_CATEGORIES = [
    ("Electronics", "Electronic devices and accessories"),
    ("Clothing", "Apparel and fashion items"),
    ("Books", "Books and publications"),
    ("Food & Beverages", "Food and drink items"),
    ("Home & Garden", "Home improvement and garden supplies"),
]

# name, description, price, stock, category, barcode
SAMPLE_PRODUCTS = [
    ("iPhone 15", "Latest iPhone model with advanced features", "999.99", 50, "Electronics", "1234567890123"),
    ("Samsung Galaxy S24", "Premium Android smartphone", "899.99", 45, "Electronics", "1234567890124"),
    ("MacBook Pro", "Professional laptop for developers", "1999.99", 25, "Electronics", "1234567890125"),
    ("Nike Air Max", "Comfortable running shoes", "129.99", 100, "Clothing", "1234567890126"),
    ("Adidas T-Shirt", "Cotton sports t-shirt", "29.99", 200, "Clothing", "1234567890127"),
    ("Java Programming Book", "Complete guide to Java development", "49.99", 75, "Books", "1234567890128"),
    ("Python Cookbook", "Advanced Python programming techniques", "39.99", 60, "Books", "1234567890129"),
    ("Coffee Beans", "Premium Arabica coffee beans", "15.99", 150, "Food & Beverages", "1234567890130"),
    ("Organic Tea", "Green tea with natural ingredients", "8.99", 120, "Food & Beverages", "1234567890131"),
    ("Garden Hose", "Heavy-duty garden watering hose", "45.99", 30, "Home & Garden", "1234567890132"),
]


def seed(db: Session) -> int:
    """Insert the sample catalogue. Returns the number of products added."""
    if db.query(Product.id).first() is not None:
        logger.info("Catalogue already populated, skipping seed")
        return 0

    categories = {}
    for name, description in SAMPLE_CATEGORIES:
        category = Category(name=name, description=description)
        db.add(category)
        categories[name] = category

    db.flush()

    for name, description, price, stock, category_name, barcode in SAMPLE_PRODUCTS:
        db.add(
            Product(
                name=name,
                description=description,
                price=Decimal(price),
                stock_quantity=stock,
                category_id=categories[category_name].id,
                barcode=barcode,
            )
        )

    db.commit()
    logger.info("Seeded %s categories and %s products", len(SAMPLE_CATEGORIES), len(SAMPLE_PRODUCTS))
    return len(SAMPLE_PRODUCTS)


if __name__ == "__main__":
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s | %(levelname)s | %(message)s",
    )
    Base.metadata.create_all(bind=engine)

    session = SessionLocal()
    try:
        seed(session)
    finally:
        session.close()
