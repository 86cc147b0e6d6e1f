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
"""In-memory repository for movie records."""

from __future__ import annotations

from uuid import UUID

from movie_backend.app.domain.models import Movie
from movie_backend.app.infrastructure.rw_lock import ReadWriteLock


class InMemoryMovieStore:
    """Thread-safe in-memory movie repository guarded by one reader/writer lock."""

    def __init__(self, lock: ReadWriteLock | None = None) -> None:
        self._lock = lock or ReadWriteLock()
        self._movies: dict[UUID, Movie] = {}

    def save(self, movie: Movie) -> None:
        with self._lock.write():
            self._movies[movie.id] = movie

    def get(self, movie_id: UUID) -> Movie | None:
        with self._lock.read():
            return self._movies.get(movie_id)
