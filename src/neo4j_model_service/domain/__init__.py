"""Label-scoped domain layer: models, interfaces and services."""
