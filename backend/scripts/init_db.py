"""
Initialize the database: create every table and optionally seed the
customer and product groups.

Usage:
    python scripts/init_db.py
    python scripts/init_db.py --seed-groups
    python scripts/init_db.py --seed-groups --skip-tables
"""
import sys
import os
import argparse

# Make the distributor package importable when run from backend/
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from distributor.database import engine, SessionLocal
from distributor.models.base import Base
from distributor.models import CustomerGroup, ProductGroup

DEFAULT_CUSTOMER_GROUPS = ["Retail", "Wholesale", "Distributor"]
DEFAULT_PRODUCT_GROUPS = ["Raw Materials", "Finished Goods", "Consumables"]


def create_tables():
    """Create every table on the configured database"""
    print("[*] Creating tables...")
    Base.metadata.create_all(bind=engine)
    print("[+] Tables created")


def seed_groups(model, names):
    """Insert the groups that are not there yet (case-insensitive match)"""
    db = SessionLocal()
    try:
        existing = {name.lower() for (name,) in db.query(model.name).all()}
        created = 0
        for name in names:
            if name.lower() in existing:
                continue
            db.add(model(name=name))
            created += 1
        db.commit()
        print(f"[+] {model.__tablename__}: {created} created, {len(names) - created} already present")
    finally:
        db.close()


def main():
    parser = argparse.ArgumentParser(description="Initialize the distributor database")
    parser.add_argument("--seed-groups", action="store_true", help="Seed default customer and product groups")
    parser.add_argument("--skip-tables", action="store_true", help="Skip table creation")

    args = parser.parse_args()

    if not args.skip_tables:
        create_tables()

    if args.seed_groups:
        seed_groups(CustomerGroup, DEFAULT_CUSTOMER_GROUPS)
        seed_groups(ProductGroup, DEFAULT_PRODUCT_GROUPS)

    print("[+] Done")


if __name__ == "__main__":
    main()
