"""Fold resolved requests back into the queue document."""

from __future__ import annotations

from typing import Sequence

from reservations.models import BookingRequest, QueueData


def commit_outcomes(data: QueueData, resolved: Sequence[BookingRequest]) -> QueueData:
    """Move ``resolved`` out of ``bookingRequests`` and onto the front of
    ``processedRequests``, keeping their processing order.

    Non-pending leftovers in ``bookingRequests`` (hand edits, older runs) are
    moved as well unless ``processedRequests`` already holds their id.
    """

    for request in resolved:
        if request.is_pending:
            raise ValueError(f"Request {request.id} has not been resolved")

    resolved_ids = {request.id for request in resolved}
    known_processed = {request.id for request in data.processed_requests} | resolved_ids

    remaining = []
    leftovers = []
    for request in data.booking_requests:
        if request.id in resolved_ids:
            continue
        if request.is_pending:
            remaining.append(request)
        elif request.id not in known_processed:
            leftovers.append(request)
            known_processed.add(request.id)

    data.booking_requests = remaining
    data.processed_requests = [*resolved, *leftovers, *data.processed_requests]
    return data
