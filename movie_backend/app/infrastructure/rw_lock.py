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
"""Reader/writer lock with poisoning."""

from __future__ import annotations

from contextlib import contextmanager
from threading import Condition, Lock
from typing import Iterator


class LockPoisonedError(RuntimeError):
    """Raised when a lock is acquired after a writer failed while holding it."""


class ReadWriteLock:
    """Many concurrent readers or one exclusive writer.

    Waiting writers block new readers. An exception escaping the write
    section poisons the lock; every later acquisition raises
    ``LockPoisonedError``.
    """

    def __init__(self) -> None:
        self._cond = Condition(Lock())
        self._readers = 0
        self._writer = False
        self._writers_waiting = 0
        self._poisoned = False

    @property
    def poisoned(self) -> bool:
        with self._cond:
            return self._poisoned

    @property
    def writers_waiting(self) -> int:
        with self._cond:
            return self._writers_waiting

    def _check_poisoned_locked(self) -> None:
        if self._poisoned:
            raise LockPoisonedError("lock poisoned by a failed writer")

    def acquire_read(self) -> None:
        with self._cond:
            self._check_poisoned_locked()
            while self._writer or self._writers_waiting:
                self._cond.wait()
                self._check_poisoned_locked()
            self._readers += 1

    def release_read(self) -> None:
        with self._cond:
            self._readers -= 1
            if self._readers == 0:
                self._cond.notify_all()

    def acquire_write(self) -> None:
        with self._cond:
            self._check_poisoned_locked()
            self._writers_waiting += 1
            try:
                while self._writer or self._readers:
                    self._cond.wait()
                    self._check_poisoned_locked()
            except BaseException:
                # readers may be parked behind this writer
                self._cond.notify_all()
                raise
            finally:
                self._writers_waiting -= 1
            self._writer = True

    def release_write(self, poison: bool = False) -> None:
        with self._cond:
            self._writer = False
            if poison:
                self._poisoned = True
            self._cond.notify_all()

    @contextmanager
    def read(self) -> Iterator[None]:
        self.acquire_read()
        try:
            yield
        finally:
            self.release_read()

    @contextmanager
    def write(self) -> Iterator[None]:
        self.acquire_write()
        try:
            yield
        except BaseException:
            self.release_write(poison=True)
            raise
        self.release_write()
