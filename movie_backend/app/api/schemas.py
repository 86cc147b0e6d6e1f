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
"""API schemas for the movie backend."""

from __future__ import annotations

from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class CreateMovieRequest(BaseModel):
    """Payload to create a movie."""

    model_config = ConfigDict(strict=True)

    name: str
    # unsigned 16-bit
    year: int = Field(ge=0, le=65535)
    was_good: bool


class MovieResponse(BaseModel):
    """Movie response payload."""

    id: UUID
    name: str
    year: int
    was_good: bool
