"""Tests for the console shell's handling of server responses."""

import io
import json
import unittest
from contextlib import redirect_stdout

import requests

from cli.console import ConsoleUI, error_detail


def http_error(status_code: int, body: dict) -> requests.HTTPError:
    response = requests.Response()
    response.status_code = status_code
    response._content = json.dumps(body).encode('utf-8')
    return requests.HTTPError(f"{status_code} Client Error", response=response)


class MockClient:
    """Stands in for DrillAPIClient; start_round fails or returns messages."""

    base_url = 'http://test'

    def __init__(self, start_error: Exception = None):
        self.start_error = start_error
        self.selected = []

    def select(self, k: int = None) -> dict:
        self.selected.append(k)
        return {'selection': [{'term': 'Hund', 'translation': 'dog', 'accuracy': 0.0}],
                'messages': []}

    def start_round(self) -> dict:
        if self.start_error:
            raise self.start_error
        return {'started': True, 'pool': ['Hund'],
                'messages': [{'type': 'error', 'text': 'Previous save failed'}]}


class TestErrorDetail(unittest.TestCase):

    def test_detail_from_response(self):
        error = http_error(409, {'detail': 'A round is already in progress.'})
        self.assertEqual(error_detail(error), 'A round is already in progress.')

    def test_plain_error(self):
        self.assertEqual(error_detail(ValueError('boom')), 'boom')

    def test_response_without_detail(self):
        error = http_error(500, {'oops': True})
        self.assertEqual(error_detail(error), '500 Client Error')


class TestConsoleStartRound(unittest.TestCase):

    def run_start(self, client: MockClient, k: int = None) -> tuple[bool, str]:
        ui = ConsoleUI(client)
        ui.run_round = lambda: True
        out = io.StringIO()
        with redirect_stdout(out):
            started = ui.start_round(k)
        return started, out.getvalue()

    def test_conflict_prints_server_detail(self):
        client = MockClient(http_error(409, {'detail': 'A round is already in progress.'}))
        started, output = self.run_start(client)
        self.assertFalse(started)
        self.assertIn('Error starting round: A round is already in progress.', output)
        self.assertNotIn('409', output)

    def test_start_messages_are_printed(self):
        started, output = self.run_start(MockClient())
        self.assertTrue(started)
        self.assertIn('Error: Previous save failed', output)

    def test_extended_selection_size_is_passed(self):
        client = MockClient()
        self.run_start(client, 10)
        self.assertEqual(client.selected, [10])


if __name__ == '__main__':
    unittest.main()
