"""Console UI for vocab drill application."""

from core.config import EXTENDED_SELECTION_SIZE, MULTIPLE_CHOICE, REQUIRED_CORRECT_PER_ROUND
from cli.api_client import DrillAPIClient

CANCEL_COMMAND = '!cancel'


def error_detail(error: Exception) -> str:
    """Server-side `detail` of a failed request, or the error text."""
    response = getattr(error, 'response', None)
    if response is not None:
        try:
            return response.json()['detail']
        except (ValueError, KeyError, TypeError):
            pass
    return str(error)


class ConsoleUI:
    """Console user interface for vocab drill application."""

    def __init__(self, client: DrillAPIClient):
        self.client = client

    def print_messages(self, messages: list[dict]):
        """Render presenter output sent back by the server."""
        for message in messages:
            kind = message['type']
            if kind == 'prompt':
                print(f"\n>>> {message['text']}")
            elif kind == 'options':
                for i, option in enumerate(message['options'], 1):
                    print(f"  {i}) {option}")
            elif kind == 'report':
                self.print_report(message['text'])
            elif kind == 'error':
                print(f"Error: {message['text']}")

    def print_report(self, report: str):
        print('\n' + '=' * 40)
        print(report)
        print('=' * 40 + '\n')

    def print_words(self, words: list[dict]):
        print('\n' + '=' * 50)
        print(f"{'Term':<20} {'Translation':<20} {'Score':>8}")
        print('-' * 50)
        for word in words:
            score = f"{word['correct']}/{word['attempted']}"
            print(f"{word['term']:<20} {word['translation']:<20} {score:>8}")
        print('=' * 50 + '\n')

    def read_choice(self, options: list[str]) -> str:
        """Read an option by number or by text."""
        while True:
            user_input = input('==> ').strip()
            if user_input.isdigit() and 1 <= int(user_input) <= len(options):
                return options[int(user_input) - 1]
            if user_input:
                return user_input
            print(f'Pick 1-{len(options)}.')

    def read_written(self) -> str | None:
        user_input = input('==> ').strip()
        if user_input == CANCEL_COMMAND:
            return None
        return user_input

    def run_round(self) -> bool:
        """Ask questions until the round completes. Returns False if the user quit."""
        print(f'Answer each word correctly {REQUIRED_CORRECT_PER_ROUND} times. '
              f'Type "{CANCEL_COMMAND}" to skip a written answer, "exit" to stop.')
        while True:
            question = self.client.get_question()
            self.print_messages(question['messages'])

            if question['modality'] == MULTIPLE_CHOICE:
                choice = self.read_choice(question['options'])
                if choice.lower() == 'exit':
                    self.client.abandon_round()
                    return False
                result = self.client.submit_choice(choice)
            else:
                answer = self.read_written()
                if answer is not None and answer.lower() == 'exit':
                    self.client.abandon_round()
                    return False
                result = self.client.submit_written_answer(answer)
            self.print_messages(result['messages'])

            while result.get('needs_correction'):
                correction = self.client.submit_correction(self.read_written())
                self.print_messages(correction['messages'])
                if correction['accepted']:
                    break

            if result['complete']:
                return True

    def start_round(self, k: int = None) -> bool:
        """Select the weakest words and run a round over them."""
        selection = self.client.select(k)
        self.print_messages(selection['messages'])
        if not selection['selection']:
            return False
        print('Drilling: ' + ', '.join(item['term'] for item in selection['selection']))
        try:
            started = self.client.start_round()
        except Exception as e:
            print(f"Error starting round: {error_detail(e)}")
            return False
        self.print_messages(started['messages'])
        if not self.run_round():
            print('Round abandoned, nothing saved.')
        return True

    def run(self):
        """Run the main application loop."""
        try:
            health = self.client.health_check()
            print(f"Connected to vocab drill server ({health['service']})")
        except Exception:
            print(f"Error: Cannot connect to server at {self.client.base_url}")
            print("Make sure the server is running: python run_server.py")
            return

        status = self.client.get_status()
        self.print_messages(status['messages'])
        print(f"{status['word_count']} words loaded from {status['source']} "
              f"(direction: {status['direction']})")
        print('Commands: "start", "extended", "words", "report", "normal", "reverse", "reload", "exit"\n')

        while True:
            user_input = input('drill> ').strip().lower()

            if user_input == 'exit':
                print('Goodbye!')
                return

            elif user_input == 'start':
                self.start_round()

            elif user_input == 'extended':
                self.start_round(EXTENDED_SELECTION_SIZE)

            elif user_input == 'words':
                self.print_words(self.client.get_words()['words'])

            elif user_input == 'report':
                self.print_report(self.client.get_report()['report'])

            elif user_input in ('normal', 'reverse'):
                try:
                    self.client.set_direction(user_input)
                    print(f'Direction set to {user_input}.')
                except Exception as e:
                    print(f"Error setting direction: {error_detail(e)}")

            elif user_input == 'reload':
                result = self.client.load()
                self.print_messages(result['messages'])

            elif user_input:
                print(f'Unknown command: {user_input}')
