"""HTTP API for Repo Viewer."""
