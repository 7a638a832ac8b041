"""Core configuration for overskill."""
