import random
import uuid

from locust import HttpUser, task, between

TAGS = ["CN", "CN-BJ", "CN-SH", "CN-GZ"]


class RookieUser(HttpUser):
    wait_time = between(1, 3)

    def on_start(self):
        payload = {"email": f"load-{uuid.uuid4().hex[:8]}@example.com", "password": "password", "nickname": "load"}
        r = self.client.post("/api/auth/register", json=payload)
        if r.status_code != 200:
            r = self.client.post("/api/auth/login", json={"email": payload["email"], "password": payload["password"]})
        token = r.json().get("access_token")
        self.headers = {"Authorization": f"Bearer {token}"}
        self.checklists = []

    @task(4)
    def browse_city(self):
        self.client.get(f"/api/templates/city/{random.choice(TAGS)}", name="/api/templates/city/[tag]")

    @task(2)
    def search(self):
        self.client.get("/api/templates/search", params={"keyword": "租房", "location_tag": random.choice(TAGS)})

    @task(1)
    def fork(self):
        templates = self.client.get("/api/templates", params={"page_size": 10}).json()
        if not templates:
            return
        r = self.client.post(
            "/api/checklists", json={"template_id": random.choice(templates)["id"]}, headers=self.headers
        )
        if r.status_code == 200:
            self.checklists.append(r.json()["checklist"])

    @task(3)
    def toggle_step(self):
        if not self.checklists:
            return
        checklist = random.choice(self.checklists)
        index = random.randrange(len(checklist["progress_status"]))
        self.client.put(
            f"/api/checklists/{checklist['id']}/steps",
            json={"step_index": index, "completed": random.random() < 0.7},
            headers=self.headers,
            name="/api/checklists/[id]/steps",
        )
