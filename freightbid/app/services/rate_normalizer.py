"""
Rate Normalizer.

Converts raw carrier rate submissions into per-mile rates using route
distances. Pure computation, no I/O.

Rates quoted in different currencies are treated as directly comparable
numbers; no conversion is applied.
"""

from typing import Dict, Iterable, List, Mapping, Optional, Tuple

from pydantic import BaseModel

from freightbid.app.models.enums import CurrencyType


class RateSubmission(BaseModel):
    """A carrier's quoted value for one route in one bid."""

    id: int
    bid_id: int
    route_id: int
    carrier_id: int
    carrier_name: str = ""
    value: Optional[float] = None
    currency: CurrencyType = CurrencyType.USD
    comment: Optional[str] = None
    version: int = 1


class NormalizedRate(BaseModel):
    """A submission with its per-mile rate, when the route distance allows one."""

    route_id: int
    carrier_id: int
    carrier_name: str
    value: float
    distance: Optional[float] = None
    per_mile: Optional[float] = None

    @property
    def has_per_mile(self) -> bool:
        return self.per_mile is not None


def usable_distance(distance: Optional[float]) -> Optional[float]:
    """Return the distance if it can divide a rate, else None."""
    if distance is None or distance <= 0:
        return None
    return float(distance)


def select_current_versions(submissions: Iterable[RateSubmission]) -> List[RateSubmission]:
    """
    Keep only the latest version of each (bid, route, carrier) submission.

    Older versions stay in the store but are superseded for analytics.
    Input order is preserved for the surviving rows.
    """
    submissions = list(submissions)
    latest: Dict[Tuple[int, int, int], RateSubmission] = {}

    for submission in submissions:
        key = (submission.bid_id, submission.route_id, submission.carrier_id)
        current = latest.get(key)
        if current is None or (submission.version, submission.id) > (current.version, current.id):
            latest[key] = submission

    kept_ids = {s.id for s in latest.values()}
    return [s for s in submissions if s.id in kept_ids]


def normalize_rates(
    submissions: Iterable[RateSubmission],
    distances: Mapping[int, Optional[float]],
) -> List[NormalizedRate]:
    """
    Attach a per-mile value to every submission with a value.

    Args:
        submissions: Rate submissions for a single bid
        distances: Route id -> distance (None when unknown)

    Returns:
        One NormalizedRate per submission that carries a value. `per_mile`
        is None when the route has no positive distance; such entries still
        count toward raw-value statistics.
    """
    normalized = []
    for submission in submissions:
        if submission.value is None:
            continue

        distance = usable_distance(distances.get(submission.route_id))
        per_mile = submission.value / distance if distance is not None else None

        normalized.append(NormalizedRate(
            route_id=submission.route_id,
            carrier_id=submission.carrier_id,
            carrier_name=submission.carrier_name,
            value=submission.value,
            distance=distance,
            per_mile=per_mile,
        ))
    return normalized


def per_mile_rates(normalized: Iterable[NormalizedRate]) -> List[NormalizedRate]:
    """Entries that can take part in per-mile aggregates."""
    return [rate for rate in normalized if rate.has_per_mile]
