"""
Locust load tests for the givetrack API.

Install: pip install locust
Run: locust -f locustfile.py --host=http://127.0.0.1:5050

For headless: locust -f locustfile.py --host=http://127.0.0.1:5050 \
    --users 10 --spawn-rate 2 --run-time 1m --headless

Set RATE_LIMIT_ENABLED=0 on the server, or createDonation will start answering 429.
"""

import os
from locust import HttpUser, task, between


class GivetrackUser(HttpUser):
    wait_time = between(1, 3)

    def on_start(self):
        self.campaign_id = int(os.getenv("LOCUST_CAMPAIGN_ID", "1"))

    @task(10)
    def healthcheck(self):
        self.client.get("/api/healthcheck")

    @task(8)
    def campaigns(self):
        self.client.get("/api/getCampaigns")

    @task(6)
    def campaign_stats(self):
        self.client.get(
            "/api/getCampaignWithStats",
            params={"id": self.campaign_id},
            name="/api/getCampaignWithStats",
        )

    @task(4)
    def latest_donors(self):
        self.client.get(
            "/api/getLatestDonors",
            params={"campaign_id": self.campaign_id, "limit": 5},
            name="/api/getLatestDonors",
        )

    @task(2)
    def search(self):
        self.client.get(
            "/api/searchDonors", params={"query": "jo"}, name="/api/searchDonors"
        )

    @task(1)
    def donate(self):
        self.client.post(
            "/api/createDonation",
            json={
                "campaign_id": self.campaign_id,
                "donor_name": "Load Test",
                "donor_email": None,
                "donor_phone": None,
                "amount": 5,
                "message": None,
            },
        )
