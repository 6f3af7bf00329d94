"""Command-line entry point for the Explorer API server."""

from explorer_api.main import main

if __name__ == "__main__":
    main()
