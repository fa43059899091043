"""Command-line tools for inspecting segment files."""
