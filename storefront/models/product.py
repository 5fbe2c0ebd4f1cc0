from sqlmodel import SQLModel, Field


class Product(SQLModel):
    """
    Catalog entry.

    Persisted as one element of the JSON product list
    (key '<prefix>_products'). The catalog store is the source of truth;
    cart rows and order items carry snapshots of these fields.
    """

    id: int = Field(
        description="Unique product id (seeded 1..8, then time-derived)",
    )

    name: str = Field(
        description="Display name",
    )

    price: float = Field(
        ge=0,
        description="Unit price in USD",
    )

    category: str = Field(
        description="Free-text category label, e.g. 'Shirts'",
    )

    image: str = Field(
        description="Image URI",
    )


SEED_PRODUCTS: list[Product] = [
    Product(id=1, name="Plain White Shirt", price=29.00, category="Shirts",
            image="https://picsum.photos/400/500?random=10"),
    Product(id=2, name="Classic Cardigan", price=49.00, category="Outerwear",
            image="https://picsum.photos/400/500?random=11"),
    Product(id=3, name="Brown Bomber Jacket", price=89.00, category="Jackets",
            image="https://picsum.photos/400/500?random=12"),
    Product(id=4, name="Grey Sweatshirt", price=35.00, category="Hoodies",
            image="https://picsum.photos/400/500?random=13"),
    Product(id=5, name="Checkered Overshirt", price=55.00, category="Shirts",
            image="https://picsum.photos/400/500?random=14"),
    Product(id=6, name="Navy Trousers", price=45.00, category="Pants",
            image="https://picsum.photos/400/500?random=15"),
    Product(id=7, name="Beige Trench Coat", price=120.00, category="Coats",
            image="https://picsum.photos/400/500?random=16"),
    Product(id=8, name="Striped Polo", price=32.00, category="Shirts",
            image="https://picsum.photos/400/500?random=17"),
]
