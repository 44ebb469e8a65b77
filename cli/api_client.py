"""REST API client for vocab drill server."""

import requests


class DrillAPIClient:
    """Client for communicating with the vocab drill REST API."""

    def __init__(self, base_url: str = "http://localhost:8000"):
        self.base_url = base_url.rstrip('/')
        self.session = requests.Session()

    def _get(self, endpoint: str, params: dict = None) -> dict:
        """Make a GET request."""
        response = self.session.get(f"{self.base_url}{endpoint}", params=params or {})
        response.raise_for_status()
        return response.json()

    def _post(self, endpoint: str, data: dict = None) -> dict:
        """Make a POST request."""
        response = self.session.post(f"{self.base_url}{endpoint}", json=data or {})
        response.raise_for_status()
        return response.json()

    def health_check(self) -> dict:
        """Check if the server is running."""
        return self._get("/")

    def get_status(self) -> dict:
        return self._get("/api/status")

    def load(self, source: str = None) -> dict:
        return self._post("/api/load", {'source': source})

    def get_words(self) -> dict:
        return self._get("/api/words")

    def select(self, k: int = None) -> dict:
        """Select the k weakest words (server default when k is None)."""
        return self._post("/api/select", {'k': k})

    def start_round(self) -> dict:
        return self._post("/api/round/start")

    def abandon_round(self) -> dict:
        return self._post("/api/round/abandon")

    def get_question(self) -> dict:
        return self._get("/api/question")

    def submit_written_answer(self, answer: str | None) -> dict:
        return self._post("/api/answer/written", {'answer': answer})

    def submit_choice(self, choice: str) -> dict:
        return self._post("/api/answer/choice", {'choice': choice})

    def submit_correction(self, text: str | None) -> dict:
        return self._post("/api/answer/correction", {'text': text})

    def get_report(self) -> dict:
        return self._get("/api/report")

    def set_direction(self, direction: str) -> dict:
        return self._post("/api/direction", {'direction': direction})
