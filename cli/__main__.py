"""Entry point for vocab drill CLI client."""

import argparse
import sys

from cli.api_client import DrillAPIClient
from cli.console import ConsoleUI


def main():
    parser = argparse.ArgumentParser(description='Vocab Drill - practice your weakest words')
    parser.add_argument(
        '--server',
        default='http://localhost:8000',
        help='Server URL (default: http://localhost:8000)'
    )
    args = parser.parse_args()

    client = DrillAPIClient(base_url=args.server)
    ui = ConsoleUI(client)

    try:
        ui.run()
    except KeyboardInterrupt:
        print('\nGoodbye!')
        sys.exit(0)


if __name__ == '__main__':
    main()
