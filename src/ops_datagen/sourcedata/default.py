"""
Default operations profile for data generation.

Fixed label sets and weight tables. Configuration copies these as defaults,
so a run can override any of them without touching this module.

Usage:
    from ops_datagen.sourcedata.default import PRODUCT_CATEGORIES, SALES_REGIONS
"""

PRODUCT_CATEGORIES = [
    "Electronics",
    "Home & Kitchen",
    "Office Supplies",
    "Apparel",
    "Sports & Outdoors",
    "Health & Beauty",
]

# Words combined into synthetic product names, keyed by category
PRODUCT_NAME_WORDS: dict[str, list[str]] = {
    "Electronics": ["Charger", "Headset", "Speaker", "Monitor", "Keyboard", "Router"],
    "Home & Kitchen": ["Kettle", "Blender", "Skillet", "Toaster", "Lamp", "Organizer"],
    "Office Supplies": ["Stapler", "Notebook", "Binder", "Desk Tray", "Marker Set"],
    "Apparel": ["Jacket", "Hoodie", "Polo", "Sneakers", "Cap", "Scarf"],
    "Sports & Outdoors": ["Tent", "Yoga Mat", "Bottle", "Backpack", "Dumbbell"],
    "Health & Beauty": ["Lotion", "Shampoo", "Toothbrush", "Serum", "Sunscreen"],
}

PRODUCT_NAME_ADJECTIVES = [
    "Classic",
    "Compact",
    "Deluxe",
    "Essential",
    "Pro",
    "Ultra",
    "Eco",
    "Premium",
]

# (country, region, weight); country and region are always sampled together
SUPPLIER_LOCATIONS: list[tuple[str, str, float]] = [
    ("United States", "North America", 4.0),
    ("Canada", "North America", 1.5),
    ("Mexico", "North America", 1.5),
    ("Germany", "Europe", 1.5),
    ("France", "Europe", 1.0),
    ("United Kingdom", "Europe", 1.0),
    ("China", "Asia", 3.0),
    ("India", "Asia", 1.5),
    ("Vietnam", "Asia", 1.0),
    ("Brazil", "South America", 0.5),
]

SUPPLIER_NAME_PREFIXES = [
    "Apex",
    "Bluewater",
    "Cedar",
    "Delta",
    "Evergreen",
    "Frontier",
    "Granite",
    "Harbor",
    "Ironwood",
    "Summit",
]

SUPPLIER_NAME_SUFFIXES = [
    "Supply Co",
    "Trading",
    "Manufacturing",
    "Distributors",
    "Industries",
    "Wholesale",
]

SALES_REGIONS: dict[str, float] = {
    "North": 0.25,
    "South": 0.20,
    "East": 0.25,
    "West": 0.20,
    "Central": 0.10,
}

DEPARTMENTS = [
    "Sales",
    "Marketing",
    "Operations",
    "Finance",
    "IT",
    "HR",
]

EXPENSE_CATEGORIES: dict[str, float] = {
    "Travel": 0.15,
    "Software": 0.15,
    "Rent": 0.10,
    "Utilities": 0.10,
    "Advertising": 0.15,
    "Office Supplies": 0.15,
    "Training": 0.10,
    "Maintenance": 0.10,
}

EXPENSE_TYPES: dict[str, float] = {
    "Operational": 0.70,
    "Capital": 0.20,
    "Discretionary": 0.10,
}
