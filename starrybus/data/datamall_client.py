"""LTA DataMall bus arrival API client."""

from __future__ import annotations

from typing import Any

import requests

DATAMALL_API_BASE = "http://datamall2.mytransport.sg/ltaodataservice"


class DataMallClientError(Exception):
    """Raised when a DataMall request fails or returns a non-200 response."""


class DataMallClient:
    """Thin wrapper around the DataMall BusArrivalv2 endpoint using requests."""

    def __init__(
        self,
        api_key: str,
        base_url: str = DATAMALL_API_BASE,
        timeout_seconds: float = 10,
    ) -> None:
        self._api_key = api_key
        self._base_url = base_url.rstrip("/")
        self._timeout_seconds = timeout_seconds

    def get_bus_arrivals(self, stop_code: int) -> dict[str, Any]:
        """Fetch the raw arrival estimates for one bus stop."""
        return self._get("/BusArrivalv2", params={"BusStopCode": stop_code})

    def _get(self, path: str, params: dict[str, Any] | None = None) -> dict[str, Any]:
        url = f"{self._base_url}{path}"
        headers = {"AccountKey": self._api_key, "accept": "application/json"}
        try:
            response = requests.get(url, headers=headers, params=params, timeout=self._timeout_seconds)
        except requests.RequestException as exc:
            raise DataMallClientError(f"DataMall request failed: {exc}") from exc

        if response.status_code != 200:
            body_text = response.text.strip()
            detail = f"Status {response.status_code}"
            if body_text:
                detail = f"{detail}, Body: {body_text}"
            raise DataMallClientError(f"DataMall request failed: {detail}")

        try:
            return response.json()
        except ValueError as exc:
            raise DataMallClientError("DataMall response was not valid JSON") from exc


__all__ = ["DATAMALL_API_BASE", "DataMallClient", "DataMallClientError"]
