from __future__ import annotations

from datetime import datetime
from typing import Any, Iterable
from urllib.parse import quote

import httpx

from ..core.errors import (
    ERRORS_BY_CODE,
    AvailabilityError,
    ConflictError,
    NotFoundError,
    StoreError,
)
from ..core.records import AvailabilityRecord, ClassOccupancy


def record_from_item(item: dict[str, Any]) -> AvailabilityRecord:
    return AvailabilityRecord(
        id=int(item["id"]),
        teacher=str(item["teacher"]),
        class_code=str(item["classCode"]),
        slots=tuple(str(s) for s in item["slots"]),
        created_at=datetime.fromisoformat(str(item["createdAt"])),
    )


def _error_from_response(res: httpx.Response) -> AvailabilityError:
    try:
        data = res.json()
    except ValueError:
        data = {}
    if not isinstance(data, dict):
        data = {}
    message = str(data.get("error") or f"HTTP {res.status_code}: {res.text}")
    details = data.get("details") if isinstance(data.get("details"), dict) else {}
    cls = ERRORS_BY_CODE.get(str(data.get("code")))

    if cls is ConflictError:
        return ConflictError(
            tuple(details.get("slots", ())),
            tuple(int(i) for i in details.get("conflictingIds", ())),
        )
    if cls is NotFoundError:
        return NotFoundError(int(details.get("id", 0)))
    if cls is not None:
        return cls(message, details=details)
    return StoreError(message, details={"status": res.status_code})


class AvailabilityClient:
    """HTTP client for a running classavail server.

    Contract:
    - GET    /api/availabilities
    - GET    /api/availabilities/{id}
    - POST   /api/availabilities          {teacher, classCode, slots}
    - PUT    /api/availabilities/{id}     {teacher, classCode, slots}
    - DELETE /api/availabilities/{id}
    - GET    /api/classes/{classCode}/slots

    Error responses are raised as the matching `classavail.core.errors` class.
    Pass `http` to reuse an existing `httpx.Client` (e.g. FastAPI's TestClient).
    """

    def __init__(
        self,
        base_url: str = "http://127.0.0.1:8000",
        *,
        http: httpx.Client | None = None,
        timeout_s: float = 10.0,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout_s = timeout_s
        self._http = http

    def _request(self, method: str, url: str, **kwargs: Any) -> Any:
        try:
            if self._http is not None:
                res = self._http.request(method, url, **kwargs)
            else:
                with httpx.Client(base_url=self.base_url, timeout=self.timeout_s) as client:
                    res = client.request(method, url, **kwargs)
        except httpx.HTTPError as ex:
            raise StoreError(f"Request to {self.base_url}{url} failed: {ex}") from ex

        if res.status_code >= 400:
            raise _error_from_response(res)
        return res.json()

    @staticmethod
    def _payload(teacher: str, class_code: str, slots: Iterable[str]) -> dict[str, Any]:
        return {"teacher": teacher, "classCode": class_code, "slots": list(slots)}

    def healthy(self) -> bool:
        """True if a classavail server answers /healthz."""
        try:
            return bool(self._request("GET", "/healthz").get("ok"))
        except (AvailabilityError, ValueError, AttributeError):
            return False

    def slots(self) -> list[str]:
        return [str(s) for s in self._request("GET", "/api/slots")["slots"]]

    def list_all(self) -> list[AvailabilityRecord]:
        return [record_from_item(i) for i in self._request("GET", "/api/availabilities")]

    def get(self, record_id: int) -> AvailabilityRecord:
        return record_from_item(self._request("GET", f"/api/availabilities/{int(record_id)}"))

    def create(self, teacher: str, class_code: str, slots: Iterable[str]) -> AvailabilityRecord:
        data = self._request("POST", "/api/availabilities", json=self._payload(teacher, class_code, slots))
        return record_from_item(data)

    def update(self, record_id: int, teacher: str, class_code: str, slots: Iterable[str]) -> AvailabilityRecord:
        data = self._request(
            "PUT",
            f"/api/availabilities/{int(record_id)}",
            json=self._payload(teacher, class_code, slots),
        )
        return record_from_item(data)

    def delete(self, record_id: int) -> None:
        self._request("DELETE", f"/api/availabilities/{int(record_id)}")

    def occupancy(self, class_code: str) -> ClassOccupancy:
        data = self._request("GET", f"/api/classes/{quote(class_code, safe='')}/slots")
        return ClassOccupancy(
            class_code=str(data["classCode"]),
            occupied={str(k): str(v) for k, v in data["occupied"].items()},
            free=tuple(str(s) for s in data["free"]),
        )
