#!/usr/bin/env python3
"""
Seed script: creates demo users and vehicle reports via the API (no direct DB).
Run: API must be running.
  python scripts/seed_data.py
  python scripts/seed_data.py --base-url http://localhost:8000/api/v1 --approve-all
"""

import argparse

import httpx

API_BASE = "http://localhost:8000/api/v1"

USERS = [
    {"email": "john.doe@example.com", "first_name": "John", "last_name": "Doe", "password": "password123"},
    {"email": "jane.smith@example.com", "first_name": "Jane", "last_name": "Smith", "password": "password123"},
    {"email": "mike.johnson@example.com", "first_name": "Mike", "last_name": "Johnson", "password": "password123"},
]

# (owner index, report body, approved)
REPORTS = [
    (0, {"make": "Toyota", "model": "Camry", "year": 2020, "mileage": 25000, "price": "22000.00",
         "longitude": -122.4194, "latitude": 37.7749,
         "description": "Well-maintained Toyota Camry in excellent condition"}, True),
    (1, {"make": "Honda", "model": "Civic", "year": 2019, "mileage": 30000, "price": "18500.00",
         "longitude": -74.006, "latitude": 40.7128,
         "description": "Honda Civic with low mileage, perfect for city driving"}, True),
    (2, {"make": "Ford", "model": "Focus", "year": 2018, "mileage": 45000, "price": "15000.00",
         "longitude": -87.6298, "latitude": 41.8781,
         "description": "Ford Focus, good condition, recent service"}, False),
    (0, {"make": "Toyota", "model": "Camry", "year": 2021, "mileage": 15000, "price": "25000.00",
         "longitude": -118.2437, "latitude": 34.0522,
         "description": "Nearly new Toyota Camry with warranty"}, True),
    (1, {"make": "BMW", "model": "3 Series", "year": 2020, "mileage": 20000, "price": "35000.00",
         "longitude": -71.0588, "latitude": 42.3601,
         "description": "Luxury BMW 3 Series in pristine condition"}, True),
]


def ensure_user(client: httpx.Client, body: dict) -> str | None:
    """Create the user, or look it up when the email is already registered."""
    r = client.post("/users", json=body)
    if r.status_code == 201:
        return r.json()["id"]
    if r.status_code == 409:
        r = client.get(f"/users/by-email/{body['email']}")
        if r.status_code == 200:
            return r.json()["id"]
    print(f"  ! user {body['email']}: {r.status_code} {r.text[:80]}")
    return None


def main():
    ap = argparse.ArgumentParser(description="Seed users and vehicle reports via API")
    ap.add_argument("--base-url", default=API_BASE, help="API base URL")
    ap.add_argument("--approve-all", action="store_true", help="Approve every seeded report")
    args = ap.parse_args()

    errors = []
    with httpx.Client(base_url=args.base_url, timeout=30.0) as client:
        print(f"Creating {len(USERS)} users...")
        user_ids = [ensure_user(client, body) for body in USERS]

        print(f"Creating {len(REPORTS)} reports...")
        created = 0
        for owner, body, approved in REPORTS:
            user_id = user_ids[owner]
            if user_id is None:
                errors.append(f"Report {body['make']} {body['model']}: owner missing")
                continue
            r = client.post("/reports", params={"user_id": user_id}, json=body)
            if r.status_code != 201:
                errors.append(f"Report {body['make']} {body['model']}: {r.status_code} {r.text[:80]}")
                continue
            report = r.json()
            created += 1
            print(f"  Created report: {report['car_identifier']}")
            if approved or args.approve_all:
                r = client.patch(f"/reports/{report['id']}/approve")
                if r.status_code != 200:
                    errors.append(f"Approve {report['id']}: {r.status_code}")

    print(f"\nDone. Users: {sum(1 for u in user_ids if u)}, Reports created: {created}")
    if errors:
        print(f"Errors ({len(errors)}):")
        for e in errors:
            print("  ", e)


if __name__ == "__main__":
    main()
