"""Command line entrypoint for run-node."""
