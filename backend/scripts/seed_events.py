import json
import os
import sys

import httpx

BASE_URL = os.getenv("PUZZLE_RSVP_URL", "http://localhost:8000")
ADMIN_KEY = os.getenv("ADMIN_API_KEY", "")


def load_events(path):
    with open(path) as f:
        return json.load(f)


def create_event(client, event):
    event_data = {
        "slug": event["slug"],
        "title": event["title"],
        "event_date": event.get("event_date"),
        "is_active": event.get("is_active", True),
    }
    response = client.post("/admin/events/", json=event_data)
    if response.status_code == 409:
        print(f"Event {event['slug']} already exists, skipping")
        return None
    response.raise_for_status()
    return response.json()["slug"]


def create_invites(client, slug, guest_names):
    invite_urls = []
    for guest_name in guest_names:
        response = client.post(f"/admin/events/{slug}/invites", json={"guest_name": guest_name})
        response.raise_for_status()
        invite_urls.append((guest_name, response.json()["invite_url"]))
    return invite_urls


if __name__ == "__main__":
    # usage: seed_events.py events.json [guests.txt]
    events = load_events(sys.argv[1])
    guests = []
    if len(sys.argv) > 2:
        with open(sys.argv[2]) as f:
            guests = [line.strip() for line in f if line.strip()]

    with httpx.Client(base_url=BASE_URL, headers={"X-Admin-Key": ADMIN_KEY}) as client:
        for event in events:
            slug = create_event(client, event)
            if slug and guests:
                for guest_name, url in create_invites(client, slug, guests):
                    print(f"{slug}\t{guest_name}\t{url}")
