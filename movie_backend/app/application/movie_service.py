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
"""Application layer use-cases for movie records."""

from __future__ import annotations

import logging
from typing import Protocol
from uuid import UUID, uuid4

from movie_backend.app.domain.models import Movie

logger = logging.getLogger(__name__)


class MovieNotFoundError(LookupError):
    """Raised when a movie identifier is unknown or malformed."""

    def __init__(self, movie_id: str) -> None:
        super().__init__(f"Movie not found: {movie_id}")
        self.movie_id = movie_id


class MovieRepository(Protocol):
    """Repository contract for movie storage."""

    def save(self, movie: Movie) -> None:
        """Store a movie."""

    def get(self, movie_id: UUID) -> Movie | None:
        """Fetch a movie by ID."""


class MovieService:
    """Use-case orchestration for movie create and fetch."""

    def __init__(self, repository: MovieRepository):
        self.repository = repository

    def create_movie(self, name: str, year: int, was_good: bool) -> Movie:
        """Create a movie under a freshly generated identifier."""
        movie = Movie(id=uuid4(), name=name, year=year, was_good=was_good)
        self.repository.save(movie)
        logger.info("Created movie %s (%s, %s)", movie.id, movie.name, movie.year)
        return movie

    def get_movie(self, movie_id: str) -> Movie:
        """Fetch a movie by its identifier text."""
        try:
            key = UUID(movie_id)
        except ValueError as exc:
            logger.debug("Rejected malformed movie id %r", movie_id)
            raise MovieNotFoundError(movie_id) from exc

        movie = self.repository.get(key)
        if movie is None:
            logger.debug("Movie %s not found", key)
            raise MovieNotFoundError(movie_id)
        return movie
