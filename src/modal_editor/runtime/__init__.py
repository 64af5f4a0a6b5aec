"""Runtime services: telemetry and the editor session loop."""
