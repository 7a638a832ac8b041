"""Command-line interface for overskill."""
