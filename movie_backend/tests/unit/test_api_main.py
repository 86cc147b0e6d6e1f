# Copyright 2026 icecake0141
# SPDX-License-Identifier: Apache-2.0
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
#
# This file was created or modified with the assistance of an AI (Large Language Model).
# Review required for correctness, security, and licensing.
"""API-level tests for the movie backend."""

import os
import signal
from uuid import UUID, uuid4

import uvicorn
from fastapi.testclient import TestClient

import movie_backend.app.api.main as api_main

from movie_backend.app.api.main import app as default_app
from movie_backend.app.api.main import create_app
from movie_backend.app.infrastructure.in_memory_movie_store import InMemoryMovieStore


def make_client(**kwargs) -> TestClient:
    return TestClient(create_app(**kwargs))


def test_create_then_fetch_movie():
    client = make_client()
    create_response = client.post(
        "/movie",
        json={"name": "Inception", "year": 2010, "was_good": True},
    )
    assert create_response.status_code == 201
    created = create_response.json()
    assert set(created) == {"id", "name", "year", "was_good"}
    assert created["name"] == "Inception"
    assert created["year"] == 2010
    assert created["was_good"] is True
    assert UUID(created["id"]).version == 4

    fetch_response = client.get(f"/movie/{created['id']}")
    assert fetch_response.status_code == 200
    assert fetch_response.json() == created


def test_caller_supplied_id_is_ignored():
    client = make_client()
    supplied = str(uuid4())
    response = client.post(
        "/movie",
        json={"id": supplied, "name": "Alien", "year": 1979, "was_good": True},
    )

    assert response.status_code == 201
    assert response.json()["id"] != supplied
    assert client.get(f"/movie/{supplied}").status_code == 404


def test_distinct_creates_get_distinct_ids():
    client = make_client()
    ids = {
        client.post(
            "/movie", json={"name": f"m{i}", "year": 1990 + i, "was_good": False}
        ).json()["id"]
        for i in range(25)
    }

    assert len(ids) == 25
    for movie_id in ids:
        assert client.get(f"/movie/{movie_id}").status_code == 200


def test_fetch_unknown_movie_returns_empty_404():
    client = make_client()
    response = client.get(f"/movie/{uuid4()}")

    assert response.status_code == 404
    assert response.content == b""


def test_fetch_malformed_id_returns_404():
    client = make_client()
    response = client.get("/movie/not-a-uuid")

    assert response.status_code == 404


def test_malformed_body_is_rejected():
    client = make_client()

    missing = client.post("/movie", json={"name": "Up", "year": 2009})
    wrong_type = client.post(
        "/movie", json={"name": "Up", "year": "2009", "was_good": True}
    )
    negative_year = client.post(
        "/movie", json={"name": "Up", "year": -1, "was_good": True}
    )
    not_json = client.post(
        "/movie", content="name=Up", headers={"Content-Type": "application/json"}
    )

    assert missing.status_code == 422
    assert wrong_type.status_code == 422
    assert negative_year.status_code == 422
    assert 400 <= not_json.status_code < 500


def test_name_and_year_are_not_further_restricted():
    client = make_client()
    response = client.post(
        "/movie", json={"name": "", "year": 65535, "was_good": False}
    )

    assert response.status_code == 201
    assert response.json()["name"] == ""
    assert response.json()["year"] == 65535


def test_apps_do_not_share_stores():
    first = make_client()
    second = make_client()
    created = first.post(
        "/movie", json={"name": "Heat", "year": 1995, "was_good": True}
    ).json()

    assert second.get(f"/movie/{created['id']}").status_code == 404


def test_default_app_serves_movies():
    client = TestClient(default_app)
    created = client.post(
        "/movie", json={"name": "Jaws", "year": 1975, "was_good": True}
    ).json()

    assert client.get(f"/movie/{created['id']}").json() == created


class FailingStore(InMemoryMovieStore):
    """Store whose writer dies while holding the lock."""

    def save(self, movie):
        with self._lock.write():
            raise RuntimeError("writer crashed")


def test_poisoned_store_triggers_fatal_hook():
    fatal = []
    client = TestClient(
        create_app(store=FailingStore(), on_fatal=fatal.append),
        raise_server_exceptions=False,
    )

    crashed = client.post(
        "/movie", json={"name": "Heat", "year": 1995, "was_good": True}
    )
    assert crashed.status_code == 500
    assert fatal == []

    after = client.get(f"/movie/{uuid4()}")
    assert after.status_code == 500
    assert len(fatal) == 1


def test_poisoned_store_terminates_process_by_default(monkeypatch):
    kills = []
    monkeypatch.setattr(os, "kill", lambda pid, sig: kills.append((pid, sig)))
    client = TestClient(create_app(store=FailingStore()), raise_server_exceptions=False)

    client.post("/movie", json={"name": "Heat", "year": 1995, "was_good": True})
    assert kills == []

    response = client.get(f"/movie/{uuid4()}")
    assert response.status_code == 500
    assert kills == [(os.getpid(), signal.SIGTERM)]


def test_main_serves_on_loopback_3000(monkeypatch):
    calls = []
    monkeypatch.setattr(uvicorn, "run", lambda app, **kwargs: calls.append((app, kwargs)))

    api_main.main()

    assert len(calls) == 1
    served_app, kwargs = calls[0]
    assert served_app is api_main.app
    assert kwargs["host"] == "127.0.0.1"
    assert kwargs["port"] == 3000
    assert kwargs["log_level"] == "info"


def test_only_movie_routes_are_exposed():
    client = make_client()

    assert client.get("/health").status_code == 404
