"""Outcome wrapper for calls that may degrade instead of failing.

Analyzer derivations and embedding calls never raise to their callers.
They return an :class:`Outcome` whose ``value`` is always usable and whose
``degraded_reason`` records why the preferred provider was not used.  The
orchestrator decides what a degraded value means for the document (for
example, flagging the embedding method as ``degraded``).
"""

from __future__ import annotations

from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field

T = TypeVar("T")


class Outcome(BaseModel, Generic[T]):
    """A value plus an optional reason the value came from a fallback path."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    value: T
    degraded_reason: str | None = Field(
        default=None,
        description="Why the preferred provider was skipped, or None on the primary path.",
    )
    # Name of the provider that produced ``value``, when one did.
    provider: str | None = None

    @property
    def degraded(self) -> bool:
        return self.degraded_reason is not None

    @classmethod
    def ok(cls, value: T, provider: str | None = None) -> Outcome[T]:
        return cls(value=value, provider=provider)

    @classmethod
    def fallback(cls, value: T, reason: str) -> Outcome[T]:
        return cls(value=value, degraded_reason=reason)
