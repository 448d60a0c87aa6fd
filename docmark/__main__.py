"""
Main entry point for the document-to-Markdown converter.
"""

import sys

from .cli import main as cli_main, convert_command, markup_command

def main():
    """Route to appropriate subcommand."""
    if len(sys.argv) < 2:
        # If no subcommand, run the interactive CLI
        return cli_main()

    if sys.argv[1] == "convert":
        return convert_command(sys.argv[2:])
    elif sys.argv[1] == "markup":
        return markup_command(sys.argv[2:])
    else:
        print(f"Unknown command: {sys.argv[1]}")
        print("Usage: docmark [convert PATH... | markup FILE]")
        return 1

if __name__ == "__main__":
    sys.exit(main())
