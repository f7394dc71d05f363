#!/usr/bin/env python3
"""
Seed script: creates users with locations, items and receipts via the API (no direct DB).
Run: API must be running.
  python scripts/seed_data.py
  python scripts/seed_data.py --users 10 --receipts-per-user 20
"""

import argparse
import random
from datetime import datetime, timedelta, timezone

import httpx

API_BASE = "http://localhost:8000"

LOCATIONS = [
    ("Corner Grocery", "12 Main St"),
    ("Farmers Market", "Town Square"),
    ("Hardware Depot", "88 Industrial Rd"),
    ("Bakery Lindner", "3 Mill Lane"),
    ("Pharmacy Plus", "41 Station Ave"),
]

ITEMS = [
    ("Milk", 1.19, "l"),
    ("Bread", 2.49, "pcs"),
    ("Apples", 2.99, "kg"),
    ("Coffee beans", 8.95, "pack"),
    ("Eggs", 0.32, "pcs"),
    ("Cheese", 14.50, "kg"),
    ("Screws", 0.05, "pcs"),
    ("Paint", 24.90, "l"),
    ("Toothpaste", 1.85, "pcs"),
    ("Tomatoes", 3.40, "kg"),
]


def seed_user(client: httpx.Client, email: str, password: str, receipts: int, errors: list[str]) -> int:
    """Register (or reuse) one user and fill their account. Returns number of receipts created."""
    r = client.post("/auth/register", json={"email": email, "password": password})
    if r.status_code not in (200, 409):
        errors.append(f"Register {email}: {r.status_code} {r.text[:80]}")
        return 0
    r = client.post("/auth/login", json={"email": email, "password": password})
    if r.status_code != 200:
        errors.append(f"Login {email}: {r.status_code}")
        return 0

    for name, address in LOCATIONS:
        client.post("/locations", json={"name": name, "address": address})
    for name, price, unit in ITEMS:
        client.post("/items", json={"name": name, "price": price, "unit": unit})
    location_ids = [loc["id"] for loc in client.get("/locations").json()]
    item_ids = [item["id"] for item in client.get("/items").json()]
    if not location_ids or not item_ids:
        errors.append(f"{email}: no locations or items to build receipts from")
        return 0

    known = {r["id"] for r in client.get("/receipts").json()}
    created = 0
    now = datetime.now(timezone.utc)
    for _ in range(receipts):
        created_at = now - timedelta(days=random.randint(0, 365), minutes=random.randint(0, 1440))
        r = client.post(
            "/receipts",
            json={"locationId": random.choice(location_ids), "createdAt": created_at.isoformat()},
        )
        if r.status_code != 200:
            errors.append(f"Receipt {email}: {r.status_code} {r.text[:80]}")
            continue
        created += 1

    new_receipts = [r["id"] for r in client.get("/receipts").json() if r["id"] not in known]
    for receipt_id in new_receipts:
        for item_id in random.sample(item_ids, k=random.randint(1, min(5, len(item_ids)))):
            r = client.post(
                "/items/inreceipt",
                json={"receiptId": receipt_id, "itemId": item_id, "amount": random.choice([1, 1, 2, 3, 0.5])},
            )
            if r.status_code != 200:
                errors.append(f"Line {email}: {r.status_code} {r.text[:80]}")
    return created


def main():
    ap = argparse.ArgumentParser(description="Seed users, locations, items and receipts via API")
    ap.add_argument("--users", type=int, default=5, help="Number of users to create")
    ap.add_argument("--receipts-per-user", type=int, default=15, help="Receipts per user")
    ap.add_argument("--base-url", default=API_BASE, help="API base URL")
    args = ap.parse_args()

    errors: list[str] = []
    total_receipts = 0
    print(f"Seeding {args.users} users...")
    for i in range(args.users):
        email = f"user{i+1}@example.com"
        # One client per user: the session cookie lives in the client's jar
        with httpx.Client(base_url=args.base_url, timeout=30.0) as client:
            try:
                created = seed_user(client, email, "password123", args.receipts_per_user, errors)
            except httpx.HTTPError as e:
                errors.append(f"User {email}: {e}")
                continue
        total_receipts += created
        print(f"  User {email}: +{created} receipts")

    print(f"\nDone. Users: {args.users}, Receipts created: {total_receipts}")
    if errors:
        print(f"Errors ({len(errors)}):")
        for e in errors[:15]:
            print("  ", e)
        if len(errors) > 15:
            print("  ... and", len(errors) - 15, "more")


if __name__ == "__main__":
    main()
