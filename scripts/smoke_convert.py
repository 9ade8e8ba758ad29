import json
import os
import sys

from fastapi.testclient import TestClient
from app.main import create_app
from app.core.config import Settings

"""Smoke script for the conversion endpoints.

Runs one POST and one GET conversion against the provider selected by the
environment (EXCHANGE_RATE_PROVIDER / EXCHANGE_API_KEY), plus a static-provider
run for comparison, and prints the responses.

NOTE: This is a lightweight diagnostic and not a formal test.
"""


def run():
    out = {}
    for label, provider in (("configured", None), ("static", "static")):
        overrides = {"exchange_rate_provider": provider} if provider else {}
        client = TestClient(
            create_app(settings_override=Settings(**overrides)),
            raise_server_exceptions=False,
        )
        r_post = client.post(
            "/api/currency/convert",
            json={"sourceCurrency": "USD", "targetCurrency": "EUR", "amount": 100.0},
        )
        r_get = client.get("/api/currency/convert/usd/to/jpy", params={"amount": 25})
        out[label] = {
            "post": {"status": r_post.status_code, "body": r_post.json()},
            "get": {"status": r_get.status_code, "body": r_get.json()},
        }
    print(json.dumps(out, indent=2))


if __name__ == "__main__":
    sys.path.append(os.getcwd())
    run()
