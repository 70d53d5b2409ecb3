"""
Locust Load Test Suite

Run scenarios:
  locust -f locustfile.py --tags checkin    # Duplicate check-in race
  locust -f locustfile.py --tags register   # Duplicate registration race
  locust -f locustfile.py --tags read       # Browsing and feeds
  locust -f locustfile.py --tags edge       # Bad input
  locust -f locustfile.py                   # All tests
"""

import random
import string
from datetime import datetime, timezone, timedelta

from locust import HttpUser, task, between, tag, events

PASSWORD = "loadtest123"

# Shared state
EVENT_IDS = []
SHARED_EVENT = {}


def random_email(prefix="load"):
    suffix = "".join(random.choices(string.ascii_lowercase + string.digits, k=10))
    return f"{prefix}_{suffix}@campus.edu"


def signup(client, role="student"):
    """Register and log in a fresh user. Returns (user_id, headers) or (None, {})."""
    email = random_email(role)
    client.post("/api/v1/auth/register", json={
        "name": f"Load {role}",
        "email": email,
        "password": PASSWORD,
        "role": role,
    })
    resp = client.post("/api/v1/auth/login", json={"email": email, "password": PASSWORD})
    if resp.status_code != 200:
        return None, {}
    body = resp.json()
    return body["user"]["uid"], {"Authorization": f"Bearer {body['accessToken']}"}


def ensure_shared_event(client):
    """Create the single event every race scenario targets."""
    if SHARED_EVENT:
        return
    _, headers = signup(client, role="organizer")
    if not headers:
        return
    future = (datetime.now(timezone.utc) + timedelta(days=30)).isoformat()
    resp = client.post("/api/v1/events", json={
        "title": "Load Test Fair",
        "club": "LoadClub",
        "category": "Tech",
        "date": future,
        "time": "12:00",
        "venue": "Quad",
    }, headers=headers)
    if resp.status_code == 201:
        body = resp.json()
        SHARED_EVENT.update(id=body["id"], token=body["checkinToken"])
        print(f"\nCreated event {body['id']}\n")


@events.test_start.add_listener
def on_test_start(environment, **kwargs):
    print("\n" + "=" * 60)
    print("SETUP: shared event is created by the first user to start")
    print("=" * 60)


class CheckinRaceUser(HttpUser):
    """
    TEST 1: Each attendee fires check-ins for the same event in a loop.

    Run: locust -f locustfile.py --tags checkin -u 200 -r 50 --run-time 30s

    After test, verify no attendee was checked in twice:
      SELECT user_id, COUNT(*) FROM checkins GROUP BY user_id HAVING COUNT(*) > 1;
    Should return no rows.
    """
    wait_time = between(0, 0.05)

    def on_start(self):
        ensure_shared_event(self.client)
        self.user_id, self.headers = signup(self.client)
        if self.user_id and SHARED_EVENT:
            self.client.post(
                f"/api/v1/events/{SHARED_EVENT['id']}/register",
                json={"userId": self.user_id},
            )

    @tag("checkin")
    @task
    def check_in(self):
        if not self.user_id or not SHARED_EVENT:
            return
        with self.client.post(
            f"/api/v1/events/{SHARED_EVENT['id']}/checkin",
            json={"userId": self.user_id, "token": SHARED_EVENT["token"]},
            name="/api/v1/events/{id}/checkin",
            catch_response=True,
        ) as resp:
            if resp.status_code == 200:
                resp.success()
            elif resp.status_code == 400 and resp.json().get("code") == "already_checked_in":
                resp.success()  # Expected on every repeat
            else:
                resp.failure(f"Unexpected: {resp.status_code}")


class RegistrationRaceUser(HttpUser):
    """
    TEST 2: Repeated registration for the same event.

    Run: locust -f locustfile.py --tags register -u 100 -r 50 --run-time 30s

    After test, verify:
      SELECT user_id, COUNT(*) FROM event_registrations GROUP BY user_id HAVING COUNT(*) > 1;
    Should return no rows.
    """
    wait_time = between(0, 0.05)

    def on_start(self):
        ensure_shared_event(self.client)
        self.user_id, self.headers = signup(self.client)

    @tag("register")
    @task
    def register(self):
        if not self.user_id or not SHARED_EVENT:
            return
        with self.client.post(
            f"/api/v1/events/{SHARED_EVENT['id']}/register",
            json={"userId": self.user_id},
            name="/api/v1/events/{id}/register",
            catch_response=True,
        ) as resp:
            if resp.status_code == 200 or resp.status_code == 400:
                resp.success()
            else:
                resp.failure(f"Unexpected: {resp.status_code}")


class BrowsingUser(HttpUser):
    """
    TEST 3: Read-heavy traffic.

    Run: locust -f locustfile.py --tags read -u 100 -r 20 --run-time 60s
    """
    wait_time = between(0.1, 0.5)

    def on_start(self):
        self.user_id, self.headers = signup(self.client)

    @tag("read")
    @task(10)
    def list_events(self):
        page = random.randint(1, 5)
        resp = self.client.get(f"/api/v1/events?page={page}&page_size=20", name="/api/v1/events")
        if resp.status_code == 200:
            for event in resp.json().get("events", []):
                if event["id"] not in EVENT_IDS:
                    EVENT_IDS.append(event["id"])

    @tag("read")
    @task(5)
    def view_event(self):
        if EVENT_IDS:
            self.client.get(f"/api/v1/events/{random.choice(EVENT_IDS)}", name="/api/v1/events/{id}")

    @tag("read")
    @task(3)
    def activity_feed(self):
        self.client.get("/api/v1/activity-feed")

    @tag("read")
    @task(2)
    def recommendations(self):
        if self.user_id:
            self.client.get(
                f"/api/v1/users/{self.user_id}/recommendations",
                name="/api/v1/users/{id}/recommendations",
            )

    @tag("read")
    @task(1)
    def health_check(self):
        self.client.get("/health")


class EdgeCaseUser(HttpUser):
    """
    TEST 4: Bad input must produce error codes, never 5xx.

    Run: locust -f locustfile.py --tags edge -u 20 -r 5 --run-time 30s
    """
    wait_time = between(0.5, 1.5)

    def on_start(self):
        self.user_id, self.headers = signup(self.client)

    def expect(self, resp, codes):
        if resp.status_code in codes:
            resp.success()
        else:
            resp.failure(f"Expected {codes}, got {resp.status_code}")

    @tag("edge")
    @task
    def checkin_unknown_event(self):
        with self.client.post(
            "/api/v1/events/does-not-exist/checkin",
            json={"userId": self.user_id or "x", "token": "x"},
            catch_response=True,
        ) as resp:
            self.expect(resp, [404])

    @tag("edge")
    @task
    def checkin_bad_token(self):
        if not SHARED_EVENT:
            return
        with self.client.post(
            f"/api/v1/events/{SHARED_EVENT['id']}/checkin",
            json={"userId": self.user_id or "x", "token": "not-the-token"},
            name="/api/v1/events/{id}/checkin [bad token]",
            catch_response=True,
        ) as resp:
            self.expect(resp, [403])

    @tag("edge")
    @task
    def checkin_missing_fields(self):
        with self.client.post("/api/v1/events/any/checkin", json={}, catch_response=True) as resp:
            self.expect(resp, [400])

    @tag("edge")
    @task
    def malformed_json(self):
        with self.client.post(
            "/api/v1/events/any/register",
            data="not json at all",
            headers={"Content-Type": "application/json"},
            catch_response=True,
        ) as resp:
            self.expect(resp, [400])

    @tag("edge")
    @task
    def rating_out_of_range(self):
        if not SHARED_EVENT:
            return
        with self.client.post(
            f"/api/v1/events/{SHARED_EVENT['id']}/ratings",
            json={"userId": self.user_id or "x", "rating": 9},
            name="/api/v1/events/{id}/ratings [invalid]",
            catch_response=True,
        ) as resp:
            self.expect(resp, [400])

    @tag("edge")
    @task
    def create_event_without_auth(self):
        with self.client.post("/api/v1/events", json={"title": "x"}, catch_response=True) as resp:
            self.expect(resp, [401])
