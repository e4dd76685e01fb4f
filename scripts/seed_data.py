#!/usr/bin/env python3
"""
Seed script: creates demo users, announcements and comments via the API (no direct DB).
Run: API must be running.
  python scripts/seed_data.py
  python scripts/seed_data.py --base-url http://localhost:3000/api
"""

import argparse

import httpx

API_BASE = "http://localhost:3000/api"
PASSWORD = "123456"

USERS = [
    {"name": "Maria Souza", "email": "maria@email.com", "phone": "(71) 99999-0001"},
    {"name": "Joao Lima", "email": "joao@email.com", "phone": "(71) 99999-0002"},
    {"name": "Ana Costa", "email": "ana@email.com", "phone": "(71) 99999-0003"},
]

# (owner email, announcement body, final status)
ANNOUNCEMENTS = [
    (
        "maria@email.com",
        {"pet_name": "Rex", "description": "Caramel mutt with a blue collar, very friendly.",
         "type": "lost", "neighborhood": "Barra"},
        "active",
    ),
    (
        "joao@email.com",
        {"pet_name": "Mimi", "description": "Grey cat found near the lighthouse, no collar.",
         "type": "found", "neighborhood": "Rio Vermelho"},
        "active",
    ),
    (
        "ana@email.com",
        {"pet_name": "Buddy", "description": "Golden retriever, answers to Buddy.",
         "type": "lost", "neighborhood": "Pituba"},
        "found",
    ),
    (
        "maria@email.com",
        {"pet_name": "Simba", "description": "Orange tabby, shy with strangers.",
         "type": "lost", "neighborhood": "Itapuã"},
        "inactive",
    ),
]

COMMENTS = [
    ("joao@email.com", "Rex", "I think I saw him near Farol da Barra this morning."),
    ("ana@email.com", "Mimi", "She looks like my neighbor's cat, I'll let them know."),
]


def main():
    ap = argparse.ArgumentParser(description="Seed demo users and announcements via API")
    ap.add_argument("--base-url", default=API_BASE, help="API base URL")
    args = ap.parse_args()

    tokens: dict[str, str] = {}
    announcement_ids: dict[str, int] = {}
    errors = []

    with httpx.Client(base_url=args.base_url, timeout=30.0) as client:
        # 1) Register or log in users
        print(f"Creating {len(USERS)} users...")
        for u in USERS:
            r = client.post("/auth/register", json={**u, "password": PASSWORD})
            if r.status_code == 400:
                # Already registered on a previous run
                r = client.post("/auth/login", json={"email": u["email"], "password": PASSWORD})
            if r.status_code in (200, 201):
                tokens[u["email"]] = r.json()["token"]
            else:
                errors.append(f"User {u['email']}: {r.status_code} {r.text[:80]}")

        # 2) Announcements, then move some through the status workflow
        print(f"Creating {len(ANNOUNCEMENTS)} announcements...")
        for email, body, status in ANNOUNCEMENTS:
            if email not in tokens:
                continue
            headers = {"Authorization": f"Bearer {tokens[email]}"}
            r = client.post("/announcements", headers=headers, json=body)
            if r.status_code != 201:
                errors.append(f"Announcement {body['pet_name']}: {r.status_code} {r.text[:80]}")
                continue
            announcement_id = r.json()["announcement"]["id"]
            announcement_ids[body["pet_name"]] = announcement_id
            if status != "active":
                r = client.patch(
                    f"/announcements/{announcement_id}/status", headers=headers, json={"status": status}
                )
                if r.status_code != 200:
                    errors.append(f"Status {body['pet_name']}: {r.status_code}")

        # 3) Comments
        for email, pet_name, content in COMMENTS:
            if email not in tokens or pet_name not in announcement_ids:
                continue
            r = client.post(
                f"/announcements/{announcement_ids[pet_name]}/comments",
                headers={"Authorization": f"Bearer {tokens[email]}"},
                json={"content": content},
            )
            if r.status_code != 201:
                errors.append(f"Comment on {pet_name}: {r.status_code}")

    print(f"\nDone. Users: {len(tokens)}, Announcements created: {len(announcement_ids)}")
    if errors:
        print(f"Errors ({len(errors)}):")
        for e in errors:
            print("  ", e)


if __name__ == "__main__":
    main()
