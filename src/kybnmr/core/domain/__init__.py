"""Domain layer: models, errors and matching policies."""
