import os
import logging
from datetime import date, datetime, timezone
from typing import Any, Dict, List, Optional

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from models import Flight, Passenger

logger = logging.getLogger(__name__)


class BaseClient:
    def __init__(self, base_url: str, timeout: float = 10.0):
        if not base_url:
            raise RuntimeError("Missing base URL for ticket API")
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.s = requests.Session()
        self.s.headers.update({"Accept": "application/json"})
        token = os.getenv("SERVICE_BEARER_TOKEN")  # opcional
        if token:
            self.s.headers.update({"Authorization": f"Bearer {token}"})

        retries = Retry(total=3, backoff_factor=0.3, status_forcelist=[502, 503, 504])
        self.s.mount("https://", HTTPAdapter(max_retries=retries))
        self.s.mount("http://", HTTPAdapter(max_retries=retries))

    def _url(self, path: str) -> str:
        return f"{self.base_url}/{path.lstrip('/')}"

    def _get(self, path: str, params: Optional[Dict[str, Any]] = None) -> requests.Response:
        return self.s.get(self._url(path), params=params, timeout=self.timeout)

    def _post(self, path: str, data: Dict[str, Any]) -> requests.Response:
        return self.s.post(self._url(path), json=data, timeout=self.timeout)


# ===================== TICKETS =====================

class TicketApiClient(BaseClient):
    """
    Cliente HTTP para um inventário de voos remoto.

    GET  /flights                       -> lista completa
    GET  /flights/search?origin&destination&date=YYYY-MM-DD
    GET  /flights/{number}/seats        -> {"available_seats": n}
    POST /bookings                      -> 2xx sucesso, 4xx recusa

    Erros de rede e 5xx sobem como exceção (o chamador aplica timeout e trata).
    """

    @staticmethod
    def _flights(payload: Any) -> List[Flight]:
        items = payload.get("flights", []) if isinstance(payload, dict) else payload
        return [Flight.model_validate(it) for it in (items or [])]

    def search_flights(self, origin: str, destination: str, when: date) -> List[Flight]:
        resp = self._get(
            "flights/search",
            params={"origin": origin, "destination": destination, "date": when.isoformat()},
        )
        resp.raise_for_status()
        return self._flights(resp.json())

    def search_all_flights(self) -> List[Flight]:
        resp = self._get("flights")
        resp.raise_for_status()
        return self._flights(resp.json())

    def get_available_seats(self, flight_number: str) -> int:
        resp = self._get(f"flights/{flight_number}/seats")
        if resp.status_code == 404:
            return 0
        resp.raise_for_status()
        data = resp.json()
        if isinstance(data, dict):
            return int(data.get("available_seats", 0))
        return int(data or 0)

    def book_flight(self, flight_number: str, user_id: str, passengers: List[Passenger]) -> bool:
        body = {
            "flight_number": flight_number,
            "user_id": user_id,
            "passengers": [p.model_dump(mode="json") for p in passengers],
            "requested_at": datetime.now(timezone.utc).isoformat(),
        }
        resp = self._post("bookings", body)
        if 400 <= resp.status_code < 500:
            logger.warning("Booking refused for %s: HTTP %s", flight_number, resp.status_code)
            return False
        resp.raise_for_status()
        return True
