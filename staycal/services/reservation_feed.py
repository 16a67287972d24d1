"""Consumes reservation subscriptions and rebuilds availability per snapshot."""

from collections.abc import AsyncIterator, Callable, Iterable, Mapping
from datetime import datetime
from typing import Any, Optional, Protocol

from pydantic import BaseModel, ConfigDict, Field, model_validator
from structlog import get_logger

from staycal.exceptions import SourceUnavailable
from staycal.models.availability import AvailabilityIndex
from staycal.models.reservation import Reservation
from staycal.transformers.availability_transformer import AvailabilityTransformer

logger = get_logger(__name__)


class ReservationFilter(BaseModel):
    """Subscription filter: reservations of one listing, guest or host."""

    listing_id: Optional[str] = None
    guest_id: Optional[str] = None
    host_id: Optional[str] = None

    model_config = ConfigDict(frozen=True)

    @model_validator(mode="after")
    def exactly_one_owner(self) -> "ReservationFilter":
        given = [v for v in (self.listing_id, self.guest_id, self.host_id) if v]
        if len(given) != 1:
            raise ValueError("exactly one of listing_id, guest_id, host_id must be set")
        return self

    @property
    def field(self) -> tuple[str, str]:
        """Document field and value to match, e.g. ("hostId", "h1")."""
        if self.listing_id:
            return "listingId", self.listing_id
        if self.guest_id:
            return "guestId", self.guest_id
        return "hostId", self.host_id


class ReservationSource(Protocol):
    """Push stream of reservation lists from the document store.

    Each emission is the complete current list matching the filter.
    """

    def subscribe(self, reservation_filter: ReservationFilter) -> AsyncIterator[list[Mapping[str, Any]]]:
        ...


class FeedSnapshot(BaseModel):
    """Reservations of one emission with their derived availability."""

    reservations: tuple[Reservation, ...] = ()
    index: AvailabilityIndex = Field(default_factory=AvailabilityIndex)
    overlay: dict[str, str] = Field(default_factory=dict)
    received_at: datetime = Field(default_factory=datetime.now)

    model_config = ConfigDict(frozen=True)


class ReservationFeed:
    """Keeps availability in step with a reservation subscription.

    Every emission replaces the previous snapshot entirely; nothing is
    patched incrementally. If the source fails, the feed stops and keeps
    serving the last snapshot it built.
    """

    def __init__(self, source: ReservationSource, reservation_filter: ReservationFilter):
        """Initialize the feed.

        Args:
            source: Subscription provider
            reservation_filter: Which reservations to follow
        """
        self.source = source
        self.filter = reservation_filter
        self.latest: FeedSnapshot | None = None
        self.error: SourceUnavailable | None = None
        self.snapshots_received = 0
        self._stopped = False

        field, value = reservation_filter.field
        self.logger = logger.bind(**{_log_key(field): value})

    @staticmethod
    def build_snapshot(documents: Iterable[Any]) -> FeedSnapshot:
        """Parse one emission and derive its index and overlay.

        Args:
            documents: Raw reservation documents (or models)

        Returns:
            FeedSnapshot with reservations ordered newest first
        """
        reservations = AvailabilityTransformer.sort_by_created_desc(documents)
        return FeedSnapshot(
            reservations=tuple(reservations),
            index=AvailabilityTransformer.build_index(reservations),
            overlay=AvailabilityTransformer.booked_status_overlay(reservations),
        )

    def stop(self) -> None:
        """Stop consuming; takes effect before the next snapshot is applied."""
        self._stopped = True

    @property
    def is_stopped(self) -> bool:
        return self._stopped

    async def run(self, on_snapshot: Callable[[FeedSnapshot], None]) -> FeedSnapshot | None:
        """Consume the subscription until it ends, fails or stop() is called.

        Args:
            on_snapshot: Called with each new snapshot

        Returns:
            The last snapshot built, None if nothing arrived
        """
        self._stopped = False
        self.error = None
        iterator = None

        try:
            try:
                iterator = self.source.subscribe(self.filter).__aiter__()
            except Exception as e:
                self._source_failed(e)
                return self.latest

            self.logger.info("Reservation subscription started")

            while not self._stopped:
                try:
                    documents = await iterator.__anext__()
                except StopAsyncIteration:
                    break
                except Exception as e:
                    self._source_failed(e)
                    break

                if self._stopped:
                    break

                snapshot = self.build_snapshot(documents)
                self.latest = snapshot
                self.snapshots_received += 1

                self.logger.debug(
                    "Applied reservation snapshot",
                    reservations=len(snapshot.reservations),
                    blocked_days=len(snapshot.index.blocked_days),
                )

                on_snapshot(snapshot)
        finally:
            aclose = getattr(iterator, "aclose", None)
            if aclose is not None:
                try:
                    await aclose()
                except Exception as e:
                    self.logger.warning("Failed to close reservation subscription", error=str(e))
            self.logger.info(
                "Reservation subscription ended",
                snapshots_received=self.snapshots_received,
            )

        return self.latest

    def _source_failed(self, error: Exception) -> None:
        self.error = SourceUnavailable(str(error))
        self.logger.error(
            "Reservation source unavailable, keeping last snapshot",
            error=str(error),
            snapshots_received=self.snapshots_received,
        )


def _log_key(field: str) -> str:
    return {"listingId": "listing_id", "guestId": "guest_id", "hostId": "host_id"}[field]
