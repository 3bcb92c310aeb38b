"""
CLI for the catalog edit planner (interactive mode).

Usage:
    python cli.py                              # interactive
    python cli.py increase hoodie prices by 10%   # one-shot
"""
import json
import sys

from apps.plan_service.config import config
from apps.plan_service.schemas import to_payload
from apps.plan_service.services.messages import render_response
from apps.plan_service.services.planner import plan_from_request
from apps.plan_service.utils.logger_utils import configure_logging


def print_json(data: dict):
    """Print data as JSON"""
    print(json.dumps(data, ensure_ascii=False, indent=2))
    print()


def process_input(user_input: str, locale: str = None):
    """
    Plan one line of merchant input and print the result.

    Args:
        user_input: Free-text edit request
        locale: Locale for rendered messages (defaults to DEFAULT_LOCALE)
    """
    user_input = user_input.strip()

    if not user_input:
        return

    if user_input.lower() in ('exit', 'quit', 'q'):
        print("Exiting...")
        sys.exit(0)

    if user_input.lower() in ('help', 'h'):
        print_help()
        return

    locale = locale or config.DEFAULT_LOCALE
    response = plan_from_request({"text": user_input, "locale": locale})

    marker = {"plan": "✓", "clarify": "?", "error": "❌"}[response.action]
    for line in render_response(response, locale):
        print(f"{marker} {line}")
    print()
    print_json(to_payload(response))


def print_help():
    """Print help"""
    print("""
Describe a bulk catalog edit in plain English:
  - price:     increase hoodie prices by 10%  |  set price to $20 for mugs
  - tags:      add "Summer Sale" and "Clearance" tags
  - inventory: set stock to 5 at Main Warehouse
  - status:    archive all products  |  unpublish winter jackets

Commands:
  - help, h - show this help
  - exit, quit, q - quit
    """)


def main():
    """Entry point for interactive and one-shot mode"""
    configure_logging("WARNING")

    if len(sys.argv) > 1:
        process_input(" ".join(sys.argv[1:]))
        return

    print("=" * 60)
    print("Catalog edit planner")
    print("=" * 60)
    print("\nDescribe the change you want to make, e.g. 'increase hoodie prices by 10%'")
    print("Type 'help' for examples, 'exit' to quit\n")

    try:
        while True:
            try:
                user_input = input("plan > ").strip()
                if user_input:
                    process_input(user_input)
            except EOFError:
                print("\n\nExiting...")
                break
            except KeyboardInterrupt:
                print("\n\nExiting...")
                break

    except Exception as e:
        print(f"\n❌ Critical error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == '__main__':
    main()
