# -*- coding: utf-8 -*-
# cython: language_level=3
# BSD 3-Clause License
#
# Copyright (c) 2020-2022, Faster Speeding
# All rights reserved.
#
# Redistribution and use in source and binary forms, with or without
# modification, are permitted provided that the following conditions are met:
#
# * Redistributions of source code must retain the above copyright notice, this
#   list of conditions and the following disclaimer.
#
# * Redistributions in binary form must reproduce the above copyright notice,
#   this list of conditions and the following disclaimer in the documentation
#   and/or other materials provided with the distribution.
#
# * Neither the name of the copyright holder nor the names of its
#   contributors may be used to endorse or promote products derived from
#   this software without specific prior written permission.
#
# THIS SOFTWARE IS PROVIDED BY THE COPYRIGHT HOLDERS AND CONTRIBUTORS "AS IS"
# AND ANY EXPRESS OR IMPLIED WARRANTIES, INCLUDING, BUT NOT LIMITED TO, THE
# IMPLIED WARRANTIES OF MERCHANTABILITY AND FITNESS FOR A PARTICULAR PURPOSE ARE
# DISCLAIMED. IN NO EVENT SHALL THE COPYRIGHT HOLDER OR CONTRIBUTORS BE LIABLE
# FOR ANY DIRECT, INDIRECT, INCIDENTAL, SPECIAL, EXEMPLARY, OR CONSEQUENTIAL
# DAMAGES (INCLUDING, BUT NOT LIMITED TO, PROCUREMENT OF SUBSTITUTE GOODS OR
# SERVICES; LOSS OF USE, DATA, OR PROFITS; OR BUSINESS INTERRUPTION) HOWEVER
# CAUSED AND ON ANY THEORY OF LIABILITY, WHETHER IN CONTRACT, STRICT LIABILITY,
# OR TORT (INCLUDING NEGLIGENCE OR OTHERWISE) ARISING IN ANY WAY OUT OF THE USE
# OF THIS SOFTWARE, EVEN IF ADVISED OF THE POSSIBILITY OF SUCH DAMAGE.
"""Error reporting interface and the default logging implementation."""
from __future__ import annotations

__all__: list[str] = ["AbstractErrorReporter", "Breadcrumb", "LoggingErrorReporter"]

import abc
import collections as collections_
import dataclasses
import datetime
import logging
import typing
import uuid
from collections import abc as collections

import hikari

_LOGGER = logging.getLogger("hikari.commandeer.reporting")


@dataclasses.dataclass(frozen=True)
class Breadcrumb:
    """A single step recorded while handling a command call.

    Breadcrumbs are attached to error reports to show what happened before
    the error.
    """

    message: str
    """Human readable description of the step."""

    category: str = "command"
    """Category of the step."""

    type: str = "default"
    """Type of the step."""

    level: str = "info"
    """Severity level of the step."""

    data: collections.Mapping[str, typing.Any] = dataclasses.field(default_factory=dict)
    """Extra data attached to the step."""

    timestamp: datetime.datetime = dataclasses.field(
        default_factory=lambda: datetime.datetime.now(tz=datetime.timezone.utc)
    )
    """When the step happened."""


class AbstractErrorReporter(abc.ABC):
    """Abstract interface of an error reporting sink."""

    __slots__ = ()

    @property
    @abc.abstractmethod
    def accepts_feedback(self) -> bool:
        """Whether users may submit feedback for the errors this reports."""

    @abc.abstractmethod
    async def report(
        self,
        error: BaseException,
        /,
        *,
        tags: collections.Mapping[str, str],
        breadcrumbs: collections.Sequence[Breadcrumb],
        user: typing.Optional[hikari.User] = None,
    ) -> str:
        """Report an error.

        Parameters
        ----------
        error
            The error to report.
        tags
            String tags to attach to the report.
        breadcrumbs
            The steps which were recorded before the error.
        user
            The user whose command call raised the error.

        Returns
        -------
        str
            The correlation ID of the report.
        """

    @abc.abstractmethod
    async def submit_feedback(self, event_id: str, /, *, user: hikari.User, comments: str) -> bool:
        """Submit user feedback for a report.

        Parameters
        ----------
        event_id
            The correlation ID of the report.
        user
            The user submitting feedback.
        comments
            The feedback.

        Returns
        -------
        bool
            Whether the feedback was accepted.

            This will be [False][] if `event_id` isn't known.
        """


class LoggingErrorReporter(AbstractErrorReporter):
    """Error reporter which writes reports to a logger.

    Reports are assigned random UUID correlation IDs and the most recent IDs
    are remembered so feedback can be correlated with them.
    """

    __slots__ = ("_event_ids", "_feedback", "_logger")

    def __init__(self, *, logger: typing.Optional[logging.Logger] = None, max_events: int = 1000) -> None:
        """Initialise a logging error reporter.

        Parameters
        ----------
        logger
            The logger to write reports to.

            Defaults to the `hikari.commandeer.reporting` logger.
        max_events
            How many recent correlation IDs should be remembered.
        """
        self._event_ids: collections_.deque[str] = collections_.deque(maxlen=max_events)
        self._feedback: dict[str, list[tuple[hikari.Snowflake, str]]] = {}
        self._logger = logger or _LOGGER

    @property
    def accepts_feedback(self) -> bool:
        # <<inherited docstring from AbstractErrorReporter>>.
        return True

    @property
    def feedback(self) -> collections.Mapping[str, collections.Sequence[tuple[hikari.Snowflake, str]]]:
        """Mapping of correlation IDs to the (user ID, comments) feedback they've received."""
        return self._feedback.copy()

    def has_event_id(self, event_id: str, /) -> bool:
        """Whether a correlation ID belongs to one of the recent reports."""
        return event_id in self._event_ids

    async def report(
        self,
        error: BaseException,
        /,
        *,
        tags: collections.Mapping[str, str],
        breadcrumbs: collections.Sequence[Breadcrumb],
        user: typing.Optional[hikari.User] = None,
    ) -> str:
        # <<inherited docstring from AbstractErrorReporter>>.
        event_id = str(uuid.uuid4())
        if len(self._event_ids) == self._event_ids.maxlen:
            self._feedback.pop(self._event_ids[0], None)

        self._event_ids.append(event_id)
        trail = "\n".join(f"  [{crumb.category}] {crumb.message}" for crumb in breadcrumbs)
        self._logger.error(
            "Error report %s for user %s with tags %r\n%s",
            event_id,
            user.id if user else None,
            dict(tags),
            trail,
            exc_info=(type(error), error, error.__traceback__),
        )
        return event_id

    async def submit_feedback(self, event_id: str, /, *, user: hikari.User, comments: str) -> bool:
        # <<inherited docstring from AbstractErrorReporter>>.
        if event_id not in self._event_ids:
            return False

        _LOGGER.debug("Received feedback for report %s from %s", event_id, user.id)
        self._feedback.setdefault(event_id, []).append((user.id, comments))
        return True
