#!/usr/bin/env python

# SPDX-FileCopyrightText: 2021 Helmholtz-Zentrum für Umweltforschung GmbH - UFZ
#
# SPDX-License-Identifier: GPL-3.0-or-later
from __future__ import annotations

import enum
import functools
import logging
from typing import TYPE_CHECKING, Callable, Dict, TypeVar

from typing_extensions import ParamSpec

if TYPE_CHECKING:
    from tsproc import TsProc

__all__ = [
    "register",
    "StepStatus",
    "FUNC_MAP",
]

logger = logging.getLogger("tsproc")

# NOTE:
# the global step store,
# will be filled by calls to register
FUNC_MAP: Dict[str, Callable] = {}

T = TypeVar("T")
P = ParamSpec("P")


class StepStatus(enum.Enum):
    """Outcome of a processing step."""

    #: the step ran and replaced or modified the data
    APPLIED = "applied"
    #: a precondition of the step did not hold, the data is unchanged
    SKIPPED = "skipped"
    #: the step raised an error, which was reported
    FAILED = "failed"


def register(name: str | None = None):
    """
    Register a processing step.

    The decorated function becomes available in :py:data:`FUNC_MAP` under
    ``name`` (defaults to the function name), which is where the pipeline
    orchestrator looks up its steps. Steps are expected to return a
    :py:class:`StepStatus`, ``None`` is interpreted as
    :py:attr:`StepStatus.APPLIED`.
    """

    def inner(func: Callable[P, StepStatus | None]) -> Callable[P, StepStatus]:
        func_name = name or func.__name__

        @functools.wraps(func)
        def callWrapper(self: TsProc, *args: P.args, **kwargs: P.kwargs) -> StepStatus:
            logger.debug(f"running step {func_name!r}")
            status = func(self, *args, **kwargs)
            if status is None:
                status = StepStatus.APPLIED
            if status is StepStatus.SKIPPED:
                logger.info(f"step {func_name!r} skipped")
            return status

        FUNC_MAP[func_name] = callWrapper
        return callWrapper

    return inner
