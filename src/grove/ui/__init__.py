"""Qt-facing adapters for the project layer."""
