"""Output layer: JSON, HTML renderers, page wrapper, terminal summary."""
