"""Domain layer: repository protocols consumed by the services."""
