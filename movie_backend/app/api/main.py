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
"""FastAPI entrypoint for the movie backend."""

import logging
import os
import signal
from typing import Callable, Optional

from fastapi import Depends, FastAPI, Request, Response

from movie_backend.app.api.schemas import CreateMovieRequest, MovieResponse
from movie_backend.app.api.settings import ServerSettings
from movie_backend.app.application.movie_service import (
    MovieNotFoundError,
    MovieService,
)
from movie_backend.app.domain.models import Movie
from movie_backend.app.infrastructure.in_memory_movie_store import InMemoryMovieStore
from movie_backend.app.infrastructure.rw_lock import LockPoisonedError

logger = logging.getLogger(__name__)

FatalHook = Callable[[BaseException], None]


def terminate_process(exc: BaseException) -> None:
    """Stop the server; a poisoned store cannot be trusted again."""
    logger.critical("Terminating process after fatal error: %s", exc)
    os.kill(os.getpid(), signal.SIGTERM)


def to_response(movie: Movie) -> MovieResponse:
    """Convert domain model to API response."""
    return MovieResponse(
        id=movie.id,
        name=movie.name,
        year=movie.year,
        was_good=movie.was_good,
    )


def get_service(request: Request) -> MovieService:
    return request.app.state.service


def create_app(
    store: Optional[InMemoryMovieStore] = None,
    on_fatal: FatalHook = terminate_process,
) -> FastAPI:
    """Build the application around an explicitly provided store."""
    app = FastAPI(title="Movie Backend", version="0.1.0")
    app.state.store = store if store is not None else InMemoryMovieStore()
    app.state.service = MovieService(repository=app.state.store)
    app.state.on_fatal = on_fatal

    @app.exception_handler(MovieNotFoundError)
    def movie_not_found(request: Request, exc: MovieNotFoundError) -> Response:
        return Response(status_code=404)

    @app.exception_handler(LockPoisonedError)
    def lock_poisoned(request: Request, exc: LockPoisonedError) -> Response:
        logger.critical(
            "Movie store lock poisoned during %s %s",
            request.method,
            request.url.path,
        )
        request.app.state.on_fatal(exc)
        return Response(status_code=500)

    @app.get("/movie/{movie_id}", response_model=MovieResponse)
    def get_movie(
        movie_id: str, service: MovieService = Depends(get_service)
    ) -> MovieResponse:
        """Fetch a movie by identifier."""
        return to_response(service.get_movie(movie_id))

    @app.post("/movie", response_model=MovieResponse, status_code=201)
    def create_movie(
        payload: CreateMovieRequest, service: MovieService = Depends(get_service)
    ) -> MovieResponse:
        """Create a movie with a server-assigned identifier."""
        movie = service.create_movie(
            name=payload.name, year=payload.year, was_good=payload.was_good
        )
        return to_response(movie)

    return app


app = create_app()


def main(settings: Optional[ServerSettings] = None) -> None:
    import uvicorn

    settings = settings or ServerSettings()
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logger.info("Starting movie backend on %s:%s", settings.host, settings.port)
    uvicorn.run(app, host=settings.host, port=settings.port, log_level=settings.log_level)


if __name__ == "__main__":
    main()
