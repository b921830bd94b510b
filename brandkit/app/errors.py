"""Failure taxonomy and per-field results for the extraction pipeline."""
from dataclasses import dataclass
from typing import Callable, Generic, Optional, TypeVar

from brandkit.app.logger import logger

T = TypeVar("T")


class BrandKitError(Exception):
    """Base class for every pipeline failure."""


class ConfigurationError(BrandKitError, ValueError):
    """A run was requested with settings that name no usable strategy."""


# ============================================================================
# FATAL FAILURES - abort the run and reach the caller
# ============================================================================

class RenderFailure(BrandKitError):
    """The page could not be loaded or screenshotted."""


class PersistFailure(BrandKitError):
    """The brand kit document could not be written."""


# ============================================================================
# RECOVERABLE FAILURES - degrade a single field to its default
# ============================================================================

class RecoverableError(BrandKitError):
    """A failure contained at its point of origin."""


class ExtractionFailure(RecoverableError):
    """The content extractor found no readable article."""


class EnrichmentFailure(RecoverableError):
    """An enrichment or palette call errored, timed out or returned nothing."""


class ResponseParseFailure(EnrichmentFailure):
    """An enrichment reply did not contain a well-formed JSON object."""


class ValidationFailure(RecoverableError):
    """A derived color value failed the color-format predicate."""


@dataclass(frozen=True)
class Result(Generic[T]):
    """Outcome of one fallible contribution to the merge."""
    value: Optional[T] = None
    error: Optional[BrandKitError] = None

    @classmethod
    def success(cls, value: T) -> "Result[T]":
        return cls(value=value)

    @classmethod
    def failure(cls, error: BrandKitError) -> "Result[T]":
        return cls(error=error)

    @property
    def ok(self) -> bool:
        return self.error is None

    def value_or(self, default: T) -> T:
        if self.ok and self.value is not None:
            return self.value
        return default

    def describe(self, stage: str) -> Optional[str]:
        """Human-readable warning line for a failed result, None on success."""
        if self.ok:
            return None
        return f"{stage}: {type(self.error).__name__}: {self.error}"


def attempt(fn: Callable[[], T], stage: str) -> Result[T]:
    """Run ``fn`` and contain recoverable failures in a Result."""
    try:
        return Result.success(fn())
    except RecoverableError as e:
        logger.warning(f"⚠ {stage} failed, keeping defaults: {e}")
        return Result.failure(e)
