"""
Sample Product Dataset Generator
Writes the five product tables (info, finance, reviews, traffic, brands) as CSV
"""

import random
from datetime import datetime, timedelta
from pathlib import Path

import numpy as np
import polars as pl
from faker import Faker

fake = Faker()
random.seed(42)
np.random.seed(42)
Faker.seed(42)

OUTPUT_DIR = Path(__file__).parent.parent / "data" / "raw"
OUTPUT_DIR.mkdir(parents=True, exist_ok=True)

BRANDS = ["Adidas", "Nike"]

FOOTWEAR_ITEMS = ["Running Shoes", "Trainers", "Football Boots", "Basketball Shoes", "Slides"]
CLOTHING_ITEMS = ["T-Shirt", "Hoodie", "Track Pants", "Shorts", "Jacket", "Sports Bra"]


def _with_nulls(values, rate):
    """Replace a share of values with None"""
    mask = np.random.random(len(values)) < rate
    return [None if m else v for v, m in zip(values, mask)]


# ==========================================
# INFO
# ==========================================
def generate_info(product_ids):
    n = len(product_ids)
    print(f"📊 Generating {n:,} product info rows...")

    names, descriptions = [], []
    for _ in range(n):
        item = random.choice(FOOTWEAR_ITEMS + CLOTHING_ITEMS)
        gender = random.choice(["Men's", "Women's", "Kids'"])
        names.append(f"{gender} {fake.word().title()} {item}")
        # Descriptions of varied length so they spread over several buckets
        descriptions.append(f"{gender} {item}. " + fake.paragraph(nb_sentences=random.randint(1, 12)))

    df = pl.DataFrame({
        "product_name": names,
        "product_id": product_ids,
        "description": _with_nulls(descriptions, 0.05),
    })

    df.write_csv(OUTPUT_DIR / "info.csv")
    print(f"   ✅ info.csv: {n:,} rows")
    return df


# ==========================================
# FINANCE
# ==========================================
def generate_finance(product_ids):
    n = len(product_ids)
    print(f"📊 Generating {n:,} finance rows...")

    listing_price = np.round(np.random.uniform(10, 300, n), 2)
    # Some products have no list price
    listing_price[np.random.random(n) < 0.05] = 0
    discount = np.random.choice([0.0, 0.1, 0.2, 0.3, 0.4, 0.5], n)
    sale_price = np.round(listing_price * (1 - discount), 2)
    revenue = np.round(sale_price * np.random.randint(0, 150, n), 2)

    df = pl.DataFrame({
        "product_id": product_ids,
        "listing_price": _with_nulls(listing_price.tolist(), 0.02),
        "sale_price": sale_price,
        "discount": discount,
        "revenue": revenue,
    })

    df.write_csv(OUTPUT_DIR / "finance.csv")
    print(f"   ✅ finance.csv: {n:,} rows")
    return df


# ==========================================
# REVIEWS
# ==========================================
def generate_reviews(product_ids):
    n = len(product_ids)
    print(f"📊 Generating {n:,} review rows...")

    df = pl.DataFrame({
        "product_id": product_ids,
        "rating": [f"{r:.1f}" for r in np.round(np.random.uniform(1.0, 5.0, n), 1)],
        "reviews": np.random.randint(0, 500, n),
    })

    df.write_csv(OUTPUT_DIR / "reviews.csv")
    print(f"   ✅ reviews.csv: {n:,} rows")
    return df


# ==========================================
# TRAFFIC
# ==========================================
def generate_traffic(product_ids):
    # Not every product has traffic data
    visited = [pid for pid in product_ids if random.random() > 0.03]
    n = len(visited)
    print(f"📊 Generating {n:,} traffic rows...")

    base_date = datetime(2018, 1, 1)
    random_days = np.random.randint(0, 730, n)
    random_minutes = np.random.randint(0, 24 * 60, n)
    timestamps = [
        (base_date + timedelta(days=int(d), minutes=int(m))).strftime("%Y-%m-%d %H:%M:%S")
        for d, m in zip(random_days, random_minutes)
    ]

    df = pl.DataFrame({
        "product_id": visited,
        "last_visited": _with_nulls(timestamps, 0.08),
    })

    df.write_csv(OUTPUT_DIR / "traffic.csv")
    print(f"   ✅ traffic.csv: {n:,} rows")
    return df


# ==========================================
# BRANDS
# ==========================================
def generate_brands(product_ids):
    n = len(product_ids)
    print(f"📊 Generating {n:,} brand rows...")

    df = pl.DataFrame({
        "product_id": product_ids,
        "brand": _with_nulls(np.random.choice(BRANDS, n, p=[0.8, 0.2]).tolist(), 0.02),
    })

    df.write_csv(OUTPUT_DIR / "brands.csv")
    print(f"   ✅ brands.csv: {n:,} rows")
    return df


# ==========================================
# MAIN
# ==========================================
def main(n=3000):
    print("=" * 60)
    print("👟 Sample Product Dataset Generator")
    print("=" * 60 + "\n")

    product_ids = [fake.unique.bothify("??####-###").upper() for _ in range(n)]

    generate_info(product_ids)
    generate_finance(product_ids)
    generate_reviews(product_ids)
    generate_traffic(product_ids)
    generate_brands(product_ids)

    print("\n" + "=" * 60)
    print("✅ Dataset Generation Complete!")
    print("=" * 60)
    print(f"\n📁 Output: {OUTPUT_DIR}\n")


if __name__ == "__main__":
    main()
